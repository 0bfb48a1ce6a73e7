"""Shared API dependencies: bearer-token authentication and role gating."""

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.models.admin import Admin
from gold_portfolio.models.member import Member
from gold_portfolio.schemas.auth import TokenPayload
from gold_portfolio.schemas.common import PageParams
from gold_portfolio.services.accounts import admin_from_payload, member_from_payload
from gold_portfolio.services.auth import decode_access_token
from gold_portfolio.services.errors import AuthenticationError, ForbiddenError

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_payload(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload:
    """Validate the access token. Any failure is a 401 before the endpoint runs."""
    if credentials is None:
        if request.headers.get("Authorization"):
            raise AuthenticationError(
                "Invalid token format. Use: Bearer <token>", code="invalid_token_format"
            )
        raise AuthenticationError(
            "Authorization token is required. Please login.", code="unauthorized"
        )
    return decode_access_token(credentials.credentials)


def require_admin(payload: TokenPayload = Depends(get_token_payload)) -> TokenPayload:
    if not payload.is_admin:
        raise ForbiddenError(
            "Access denied. You do not have permission to perform this action.",
            code="forbidden",
        )
    return payload


def get_current_admin(
    payload: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session),
) -> Admin:
    return admin_from_payload(session, payload)


def get_current_member(
    payload: TokenPayload = Depends(get_token_payload),
    session: Session = Depends(get_session),
) -> Member:
    if payload.type != "member":
        raise ForbiddenError(
            "Access denied. You do not have permission to perform this action.",
            code="forbidden",
        )
    return member_from_payload(session, payload)


def page_params(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder", pattern="^(asc|desc)$"),
) -> PageParams:
    return PageParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
