"""Pydantic schemas for Member API."""

from datetime import datetime

from pydantic import Field, field_validator

from gold_portfolio.schemas.common import (
    CamelModel,
    normalize_email,
    trim_name,
    validate_password_strength,
    validate_phone,
)

MEMBER_SORT_FIELDS = {
    "createdAt": "created_at",
    "name": "name",
    "email": "email",
    "goldHoldings": "gold_holdings",
}


class MemberCreate(CamelModel):
    name: str = Field(max_length=100)
    email: str
    password: str  # plain text; hashed before storage and emailed once
    phone: str
    gold_holdings: float = Field(default=0.0, ge=0)

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        return trim_name(value)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str) -> str:
        return validate_phone(value)


class MemberUpdate(CamelModel):
    """Email, password and status are changed through their own endpoints."""

    name: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    gold_holdings: float | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return trim_name(value)

    @field_validator("phone")
    @classmethod
    def _validate_optional_phone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_phone(value)


class MemberRead(CamelModel):
    id: int
    name: str
    email: str
    phone: str
    gold_holdings: float
    is_active: bool
    created_at: datetime
    updated_at: datetime
    # hashed_password and reset token are NEVER exposed


class MemberStats(CamelModel):
    total: int
    active: int
    inactive: int
