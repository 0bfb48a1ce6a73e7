"""Member model: account holders whose gold balance is moved by trades."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class Member(SQLModel, table=True):
    __tablename__ = "member"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # stored lowercase
    hashed_password: str
    phone: str
    gold_holdings: float = 0.0  # grams
    is_active: bool = Field(default=True, index=True)

    # Password reset: only the sha256 of the emailed token is kept
    reset_password_token_hash: str | None = Field(default=None, index=True)
    reset_password_expires: datetime | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
