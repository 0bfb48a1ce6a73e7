"""Pydantic schemas for the admin and member auth API."""

from pydantic import BaseModel, Field, field_validator

from gold_portfolio.models.admin import AdminRole
from gold_portfolio.schemas.common import CamelModel, normalize_email, validate_password_strength


class TokenPayload(BaseModel):
    """Claims carried by access and refresh tokens."""

    id: int
    email: str
    role: str  # "admin", "super_admin" or "member"
    type: str  # "admin" or "member"

    @property
    def is_admin(self) -> bool:
        return self.type == "admin" and self.role in ("admin", "super_admin")


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class AdminProfile(CamelModel):
    id: int
    name: str
    email: str
    role: AdminRole


class MemberProfile(CamelModel):
    id: int
    name: str
    email: str
    phone: str
    gold_holdings: float


class AdminLoginData(CamelModel):
    admin: AdminProfile
    access_token: str
    refresh_token: str
    expires_in: int


class MemberLoginData(CamelModel):
    member: MemberProfile
    access_token: str
    refresh_token: str
    expires_in: int


class RefreshData(CamelModel):
    access_token: str
    refresh_token: str
    expires_in: int


class AdminProfileData(CamelModel):
    admin: AdminProfile


class MemberProfileData(CamelModel):
    member: MemberProfile


class ForgotPasswordRequest(CamelModel):
    email: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        return validate_password_strength(value)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        return validate_password_strength(value)
