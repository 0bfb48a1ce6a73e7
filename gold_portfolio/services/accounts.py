"""Admin and member authentication flows: login, refresh, profile, password reset."""

import logging
from datetime import datetime, timedelta, timezone

from sqlmodel import Session, select

from gold_portfolio.config import settings
from gold_portfolio.models.admin import Admin
from gold_portfolio.models.member import Member
from gold_portfolio.schemas.auth import (
    AdminLoginData,
    AdminProfile,
    MemberLoginData,
    MemberProfile,
    RefreshData,
    TokenPayload,
)
from gold_portfolio.services import email
from gold_portfolio.services.auth import (
    ADMIN_TOKEN,
    MEMBER_TOKEN,
    access_token_expires_in,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)
from gold_portfolio.services.errors import AuthenticationError, BadRequestError, ForbiddenError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_DISABLED = "Account is disabled. Please contact the administrator."
RESET_REQUESTED = "If an account exists with this email, a password reset link has been sent."


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _check_credentials(user: Admin | Member | None, password: str) -> Admin | Member:
    # Same message for unknown email and wrong password
    if user is None or not verify_password(password, user.hashed_password):
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not user.is_active:
        raise ForbiddenError(ACCOUNT_DISABLED)
    return user


def login_admin(session: Session, email_addr: str, password: str) -> AdminLoginData:
    admin = session.exec(select(Admin).where(Admin.email == email_addr.lower())).first()
    admin = _check_credentials(admin, password)
    logger.info("Admin %s logged in", admin.id)
    return AdminLoginData(
        admin=AdminProfile.model_validate(admin),
        access_token=create_access_token(admin),
        refresh_token=create_refresh_token(admin),
        expires_in=access_token_expires_in(),
    )


def login_member(session: Session, email_addr: str, password: str) -> MemberLoginData:
    member = session.exec(select(Member).where(Member.email == email_addr.lower())).first()
    member = _check_credentials(member, password)
    logger.info("Member %s logged in", member.id)
    return MemberLoginData(
        member=MemberProfile.model_validate(member),
        access_token=create_access_token(member),
        refresh_token=create_refresh_token(member),
        expires_in=access_token_expires_in(),
    )


def refresh_tokens(session: Session, refresh_token: str, portal: str) -> RefreshData:
    """Issue a new access token and a rotated refresh token for `portal` ("admin"/"member")."""
    payload = decode_refresh_token(refresh_token)
    if payload.type != portal:
        raise AuthenticationError("Invalid refresh token. Please login again.", code="invalid_token")

    model = Admin if portal == ADMIN_TOKEN else Member
    user = session.get(model, payload.id)
    if user is None:
        raise AuthenticationError(f"{portal.capitalize()} not found. Please login again.")
    if not user.is_active:
        raise AuthenticationError(ACCOUNT_DISABLED)

    return RefreshData(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
        expires_in=access_token_expires_in(),
    )


def admin_from_payload(session: Session, payload: TokenPayload) -> Admin:
    if payload.type != ADMIN_TOKEN:
        raise AuthenticationError("Admin token required.", code="invalid_token")
    admin = session.get(Admin, payload.id)
    if admin is None:
        raise AuthenticationError("Admin not found.")
    if not admin.is_active:
        raise AuthenticationError("Account is disabled.")
    return admin


def member_from_payload(session: Session, payload: TokenPayload) -> Member:
    if payload.type != MEMBER_TOKEN:
        raise AuthenticationError("Member token required.", code="invalid_token")
    member = session.get(Member, payload.id)
    if member is None:
        raise AuthenticationError("Member not found")
    if not member.is_active:
        raise AuthenticationError("Account is disabled")
    return member


def request_password_reset(session: Session, email_addr: str) -> str:
    """Store a hashed reset token and email the raw one. Returns the client message.

    The response is identical whether or not the email is registered.
    """
    member = session.exec(select(Member).where(Member.email == email_addr.lower())).first()
    if member is None:
        logger.info("Password reset requested for unknown email")
        return RESET_REQUESTED
    if not member.is_active:
        raise ForbiddenError(ACCOUNT_DISABLED)

    raw_token, token_hash = generate_reset_token()
    member.reset_password_token_hash = token_hash
    member.reset_password_expires = datetime.now(timezone.utc) + timedelta(
        minutes=settings.password_reset_expire_minutes
    )
    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    session.commit()

    email.send_password_reset_email(member.email, member.name, raw_token)
    logger.info("Password reset token issued for member %s", member.id)
    return RESET_REQUESTED


def reset_password(session: Session, raw_token: str, new_password: str) -> str:
    member = session.exec(
        select(Member).where(Member.reset_password_token_hash == hash_reset_token(raw_token))
    ).first()
    now = datetime.now(timezone.utc)
    if (
        member is None
        or member.reset_password_expires is None
        or _as_utc(member.reset_password_expires) < now
    ):
        raise BadRequestError("Invalid or expired reset token")
    if not member.is_active:
        raise ForbiddenError(ACCOUNT_DISABLED)

    member.hashed_password = hash_password(new_password)
    member.reset_password_token_hash = None
    member.reset_password_expires = None
    member.updated_at = now
    session.add(member)
    session.commit()
    logger.info("Password reset completed for member %s", member.id)
    return "Password has been reset successfully. Please login with your new password."


def change_password(session: Session, member: Member, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, member.hashed_password):
        raise BadRequestError("Current password is incorrect")
    member.hashed_password = hash_password(new_password)
    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    session.commit()
    logger.info("Member %s changed password", member.id)
