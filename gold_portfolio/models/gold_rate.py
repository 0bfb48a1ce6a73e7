"""GoldRate model: every published buy/sell rate, at most one active."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class GoldRate(SQLModel, table=True):
    __tablename__ = "gold_rate"

    id: int | None = Field(default=None, primary_key=True)
    buy_price: float  # per gram
    sell_price: float  # per gram
    is_active: bool = Field(default=True, index=True)
    effective_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
    created_by: int = Field(foreign_key="admin.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
