"""Authentication utilities: password hashing, JWT access/refresh tokens, reset tokens."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from gold_portfolio.config import settings
from gold_portfolio.models.admin import Admin
from gold_portfolio.models.member import Member
from gold_portfolio.schemas.auth import TokenPayload
from gold_portfolio.services.errors import AuthenticationError

ADMIN_TOKEN = "admin"
MEMBER_TOKEN = "member"


def hash_password(password: str) -> str:
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw, hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def access_token_expires_in() -> int:
    """Access token lifetime in seconds, reported to clients as expiresIn."""
    return settings.access_token_expire_days * 24 * 60 * 60


def _payload_for(user: Admin | Member) -> dict:
    if isinstance(user, Admin):
        return {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "type": ADMIN_TOKEN,
        }
    return {
        "sub": str(user.id),
        "email": user.email,
        "role": "member",
        "type": MEMBER_TOKEN,
    }


def _encode(payload: dict, secret: str, lifetime: timedelta) -> str:
    claims = {
        **payload,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: Admin | Member) -> str:
    return _encode(
        _payload_for(user),
        settings.access_token_secret,
        timedelta(days=settings.access_token_expire_days),
    )


def create_refresh_token(user: Admin | Member) -> str:
    return _encode(
        _payload_for(user),
        settings.refresh_token_secret,
        timedelta(days=settings.refresh_token_expire_days),
    )


def _decode(token: str, secret: str, label: str) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except ExpiredSignatureError:
        raise AuthenticationError(
            f"{label} has expired. Please login again.", code="token_expired"
        )
    except JWTError:
        raise AuthenticationError(
            f"Invalid {label.lower()}. Please login again.", code="invalid_token"
        )

    try:
        return TokenPayload(
            id=int(claims["sub"]),
            email=claims["email"],
            role=claims["role"],
            type=claims["type"],
        )
    except (KeyError, ValueError):
        raise AuthenticationError(
            f"Invalid {label.lower()}. Please login again.", code="invalid_token"
        )


def decode_access_token(token: str) -> TokenPayload:
    """Verify signature, issuer, audience and expiry of an access token."""
    return _decode(token, settings.access_token_secret, "Token")


def decode_refresh_token(token: str) -> TokenPayload:
    return _decode(token, settings.refresh_token_secret, "Refresh token")


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_reset_token() -> tuple[str, str]:
    """Return (raw token to email, hash to store)."""
    raw = secrets.token_urlsafe(32)
    return raw, hash_reset_token(raw)
