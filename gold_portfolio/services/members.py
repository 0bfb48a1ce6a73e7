"""Member management for admins: CRUD, activation toggling, search and counts."""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, func, or_, select

from gold_portfolio.models.member import Member
from gold_portfolio.schemas.common import Page, PageParams
from gold_portfolio.schemas.member import (
    MEMBER_SORT_FIELDS,
    MemberCreate,
    MemberRead,
    MemberStats,
    MemberUpdate,
)
from gold_portfolio.services import email
from gold_portfolio.services.auth import hash_password
from gold_portfolio.services.errors import BadRequestError, ConflictError, NotFoundError
from gold_portfolio.services.pagination import paginate

logger = logging.getLogger(__name__)


def get_member(session: Session, member_id: int) -> Member:
    member = session.get(Member, member_id)
    if member is None:
        raise NotFoundError("Member not found")
    return member


def list_members(session: Session, params: PageParams, active_only: bool = False) -> Page[MemberRead]:
    filters = (Member.is_active == True,) if active_only else ()
    return paginate(session, Member, params, MEMBER_SORT_FIELDS, MemberRead, filters)


def search_members(session: Session, query: str, params: PageParams) -> Page[MemberRead]:
    """Case-insensitive substring match on name or email."""
    term = (query or "").strip()
    if len(term) < 2:
        raise BadRequestError("Search query must be at least 2 characters")
    pattern = f"%{term.lower()}%"
    filters = (
        or_(func.lower(Member.name).like(pattern), func.lower(Member.email).like(pattern)),
    )
    return paginate(session, Member, params, MEMBER_SORT_FIELDS, MemberRead, filters)


def create_member(session: Session, data: MemberCreate) -> Member:
    existing = session.exec(select(Member).where(Member.email == data.email)).first()
    if existing:
        raise ConflictError("Email already exists. Please use a different email.")

    member = Member(
        name=data.name,
        email=data.email,
        hashed_password=hash_password(data.password),
        phone=data.phone,
        gold_holdings=data.gold_holdings,
    )
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Created member %s", member.id)

    # Email failure must not undo the account
    if not email.send_welcome_email(member.email, member.name, data.password):
        logger.warning("Welcome email not sent to member %s", member.id)
    return member


def update_member(session: Session, member_id: int, data: MemberUpdate) -> Member:
    member = get_member(session, member_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(member, key, value)
    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    session.commit()
    session.refresh(member)
    return member


def toggle_member_status(session: Session, member_id: int) -> Member:
    member = get_member(session, member_id)
    member.is_active = not member.is_active
    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Member %s is_active=%s", member.id, member.is_active)
    return member


def deactivate_member(session: Session, member_id: int) -> Member:
    """Soft delete: the row and its trade history are kept."""
    member = get_member(session, member_id)
    if not member.is_active:
        raise BadRequestError("Member is already inactive")
    member.is_active = False
    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Deactivated member %s", member.id)
    return member


def member_stats(session: Session) -> MemberStats:
    total = session.exec(select(func.count()).select_from(Member)).one()
    active = session.exec(
        select(func.count()).select_from(Member).where(Member.is_active == True)
    ).one()
    return MemberStats(total=total, active=active, inactive=total - active)
