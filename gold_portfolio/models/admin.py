"""Admin model: portal administrators."""

from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Admin(SQLModel, table=True):
    __tablename__ = "admin"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # stored lowercase
    hashed_password: str
    role: AdminRole = AdminRole.ADMIN
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
