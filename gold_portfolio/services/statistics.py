"""Admin dashboard aggregates."""

from sqlmodel import Session, func, select

from gold_portfolio.models.member import Member
from gold_portfolio.models.trade import Trade, TradeStatus, TradeType
from gold_portfolio.schemas.statistics import DashboardStatistics


def dashboard_statistics(session: Session) -> DashboardStatistics:
    total_members = session.exec(select(func.count()).select_from(Member)).one()
    total_gold = session.exec(select(func.coalesce(func.sum(Member.gold_holdings), 0.0))).one()
    pending_sells = session.exec(
        select(func.count())
        .select_from(Trade)
        .where(Trade.trade_type == TradeType.SELL, Trade.status == TradeStatus.PENDING)
    ).one()
    return DashboardStatistics(
        total_members=total_members,
        total_gold_holdings=total_gold,
        pending_sell_requests=pending_sells,
    )
