"""Shared response envelope, pagination and field validators."""

import re
from typing import Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(
    r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,5}[-\s.]?[0-9]{1,5}$"
)
_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")

PASSWORD_RULES = (
    "must be at least 8 characters and contain an uppercase letter, "
    "a lowercase letter, a number and a special character (@$!%*?&)"
)


class CamelModel(BaseModel):
    """Base for API bodies: snake_case in Python, camelCase on the wire."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        "allow_inf_nan": False,
    }


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: T | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(BaseModel, Generic[T]):
    items: list[T]
    pagination: Pagination


class PageParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    sort_by: str = "createdAt"
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not _EMAIL_RE.fullmatch(email):
        raise ValueError("must be a valid email address")
    return email


def validate_phone(value: str) -> str:
    phone = value.strip()
    if not _PHONE_RE.fullmatch(phone):
        raise ValueError("must be a valid phone number")
    return phone


def validate_password_strength(value: str) -> str:
    if not _PASSWORD_RE.fullmatch(value):
        raise ValueError(PASSWORD_RULES)
    return value


def trim_name(value: str) -> str:
    text = value.strip()
    if len(text) < 2:
        raise ValueError("must be at least 2 characters")
    return text
