"""Trade lifecycle: creation at the active rate, approval, cancellation, reporting.

Status transitions:
    PENDING   -> COMPLETED  (admin approval, applies the holdings delta)
    PENDING   -> CANCELLED  (admin rejection, holdings untouched)
    COMPLETED -> CANCELLED  (admin cancel, BUY only, reverses the delta once)
Every transition and its holdings change commit in one transaction.
"""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, func, select

from gold_portfolio.models.member import Member
from gold_portfolio.models.trade import Trade, TradeStatus, TradeType
from gold_portfolio.schemas.auth import TokenPayload
from gold_portfolio.schemas.common import Page, PageParams
from gold_portfolio.schemas.trade import (
    TRADE_SORT_FIELDS,
    TradeCreate,
    TradeRead,
    TradeStatistics,
    TradeStatusUpdate,
    TradeVolume,
)
from gold_portfolio.services.errors import BadRequestError, ForbiddenError, NotFoundError
from gold_portfolio.services.gold_rates import find_active_rate
from gold_portfolio.services.members import get_member
from gold_portfolio.services.pagination import paginate

logger = logging.getLogger(__name__)

# Quantities are whole milligrams (0.001 g)
GRAM_DECIMALS = 3


def _grams(value: float) -> float:
    return round(value, GRAM_DECIMALS)


def _apply_holdings_delta(member: Member, trade_type: TradeType, quantity: float) -> None:
    """BUY adds gold, SELL removes it (never below zero)."""
    if trade_type == TradeType.BUY:
        member.gold_holdings = _grams(member.gold_holdings + quantity)
    else:
        member.gold_holdings = max(0.0, _grams(member.gold_holdings - quantity))
    member.updated_at = datetime.now(timezone.utc)


def _require_holdings(member: Member, quantity: float, action: str) -> None:
    if _grams(member.gold_holdings - quantity) < 0:
        raise BadRequestError(
            f"Insufficient gold holdings. Member has {member.gold_holdings}g "
            f"but {action} {quantity}g"
        )


def get_trade(session: Session, trade_id: int) -> Trade:
    trade = session.get(Trade, trade_id)
    if trade is None:
        raise NotFoundError("Trade not found")
    return trade


def create_trade(session: Session, data: TradeCreate, actor: TokenPayload) -> Trade:
    """Create a trade priced at the currently active gold rate.

    Members may only open SELL trades for themselves; these wait for approval.
    Admins may trade for any member and complete immediately unless they ask
    for PENDING.
    """
    if actor.is_admin:
        if data.member_id is None:
            raise BadRequestError("memberId is required")
        member_id = data.member_id
        status = data.status or TradeStatus.COMPLETED
    else:
        if data.trade_type == TradeType.BUY:
            raise ForbiddenError("Only admins can create BUY trades")
        member_id = data.member_id if data.member_id is not None else actor.id
        if member_id != actor.id:
            raise ForbiddenError("Members can only create trades for themselves")
        if data.status is not None:
            raise ForbiddenError("Only admins can set the trade status")
        status = TradeStatus.PENDING

    member = get_member(session, member_id)
    if not member.is_active:
        raise BadRequestError("Member account is inactive")

    rate = find_active_rate(session)
    if rate is None:
        raise NotFoundError("No active gold rate found. Please set a gold rate first.")

    rate_at_trade = rate.buy_price if data.trade_type == TradeType.BUY else rate.sell_price

    if data.trade_type == TradeType.SELL:
        _require_holdings(member, data.quantity, "trying to sell")

    trade = Trade(
        member_id=member.id,
        trade_type=data.trade_type,
        quantity=data.quantity,
        rate_at_trade=rate_at_trade,
        total_amount=data.quantity * rate_at_trade,
        status=status,
        gold_rate_id=rate.id,
        initiated_by=actor.id,
        initiated_by_type=actor.type,
        approved_by=actor.id if actor.is_admin and status == TradeStatus.COMPLETED else None,
        notes=data.notes,
    )
    session.add(trade)
    if status == TradeStatus.COMPLETED:
        _apply_holdings_delta(member, data.trade_type, data.quantity)
        session.add(member)
    session.commit()
    session.refresh(trade)

    logger.info(
        "Trade %s created: %s %.3fg for member %s at %.2f (%s) by %s %s",
        trade.id, trade.trade_type.value, trade.quantity, member.id,
        rate_at_trade, trade.status.value, actor.type, actor.id,
    )
    return trade


def update_trade_status(
    session: Session, trade_id: int, data: TradeStatusUpdate, admin_id: int
) -> Trade:
    """Approve (COMPLETED) or reject (CANCELLED) a PENDING trade."""
    trade = get_trade(session, trade_id)

    if trade.status == TradeStatus.COMPLETED:
        raise BadRequestError("Cannot modify completed trade")
    if trade.status == TradeStatus.CANCELLED:
        raise BadRequestError("Cannot modify cancelled trade")
    if data.status == TradeStatus.PENDING:
        raise BadRequestError("Status must be COMPLETED or CANCELLED")

    member = get_member(session, trade.member_id)
    if data.status == TradeStatus.COMPLETED:
        if trade.trade_type == TradeType.SELL:
            _require_holdings(member, trade.quantity, "trade requires")
        _apply_holdings_delta(member, trade.trade_type, trade.quantity)
        session.add(member)

    trade.status = data.status
    trade.approved_by = admin_id
    if data.notes is not None:
        trade.notes = data.notes
    trade.updated_at = datetime.now(timezone.utc)
    session.add(trade)
    session.commit()
    session.refresh(trade)

    logger.info("Trade %s -> %s by admin %s", trade.id, trade.status.value, admin_id)
    return trade


def cancel_trade(session: Session, trade_id: int, admin_id: int) -> Trade:
    """Cancel a COMPLETED BUY trade and take the bought gold back."""
    trade = get_trade(session, trade_id)

    if trade.trade_type != TradeType.BUY:
        raise BadRequestError("Only BUY trades can be cancelled")
    if trade.status != TradeStatus.COMPLETED:
        raise BadRequestError("Only completed trades can be cancelled")

    member = get_member(session, trade.member_id)
    if _grams(member.gold_holdings - trade.quantity) < 0:
        raise BadRequestError(
            f"Cannot cancel: Member only has {member.gold_holdings}g but trade added "
            f"{trade.quantity}g. They may have already sold this gold."
        )

    now = datetime.now(timezone.utc)
    trade.status = TradeStatus.CANCELLED
    trade.approved_by = admin_id
    trade.updated_at = now
    member.gold_holdings = max(0.0, _grams(member.gold_holdings - trade.quantity))
    member.updated_at = now
    session.add(trade)
    session.add(member)
    session.commit()
    session.refresh(trade)

    logger.info("Trade %s cancelled by admin %s", trade.id, admin_id)
    return trade


def list_trades(
    session: Session,
    params: PageParams,
    member_id: int | None = None,
    trade_type: TradeType | None = None,
    status: TradeStatus | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> Page[TradeRead]:
    filters = []
    if member_id is not None:
        filters.append(Trade.member_id == member_id)
    if trade_type is not None:
        filters.append(Trade.trade_type == trade_type)
    if status is not None:
        filters.append(Trade.status == status)
    if start_date is not None:
        filters.append(Trade.created_at >= start_date)
    if end_date is not None:
        filters.append(Trade.created_at <= end_date)
    return paginate(session, Trade, params, TRADE_SORT_FIELDS, TradeRead, tuple(filters))


def _count(session: Session, *filters) -> int:
    return session.exec(select(func.count()).select_from(Trade).where(*filters)).one()


def _completed_volume(session: Session, trade_type: TradeType, *filters) -> TradeVolume:
    quantity, amount = session.exec(
        select(
            func.coalesce(func.sum(Trade.quantity), 0.0),
            func.coalesce(func.sum(Trade.total_amount), 0.0),
        ).where(
            Trade.trade_type == trade_type,
            Trade.status == TradeStatus.COMPLETED,
            *filters,
        )
    ).one()
    return TradeVolume(total_quantity=quantity, total_amount=amount)


def trade_statistics(session: Session, member_id: int | None = None) -> TradeStatistics:
    """Counts across all trades; volumes only count COMPLETED ones."""
    scope = (Trade.member_id == member_id,) if member_id is not None else ()
    return TradeStatistics(
        total_trades=_count(session, *scope),
        completed_trades=_count(session, Trade.status == TradeStatus.COMPLETED, *scope),
        pending_trades=_count(session, Trade.status == TradeStatus.PENDING, *scope),
        buy_trades=_count(session, Trade.trade_type == TradeType.BUY, *scope),
        sell_trades=_count(session, Trade.trade_type == TradeType.SELL, *scope),
        buy_volume=_completed_volume(session, TradeType.BUY, *scope),
        sell_volume=_completed_volume(session, TradeType.SELL, *scope),
    )
