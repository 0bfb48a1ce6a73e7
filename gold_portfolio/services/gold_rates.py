"""Gold rate publication and lookup.

Publishing a rate deactivates every existing row and inserts the new one as
active inside a single transaction, so exactly one rate is active afterwards.
"""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, func, select

from gold_portfolio.models.gold_rate import GoldRate
from gold_portfolio.schemas.common import Page, PageParams
from gold_portfolio.schemas.gold_rate import (
    GOLD_RATE_SORT_FIELDS,
    ActiveRateSummary,
    GoldRateCreate,
    GoldRateRead,
    GoldRateStatistics,
)
from gold_portfolio.services.errors import BadRequestError, NotFoundError
from gold_portfolio.services.pagination import paginate

logger = logging.getLogger(__name__)


def find_active_rate(session: Session) -> GoldRate | None:
    return session.exec(
        select(GoldRate)
        .where(GoldRate.is_active == True)
        .order_by(GoldRate.created_at.desc(), GoldRate.id.desc())
    ).first()


def get_active_rate(session: Session) -> GoldRate:
    rate = find_active_rate(session)
    if rate is None:
        raise NotFoundError("No active gold rate found. Please create one.")
    return rate


def get_rate(session: Session, rate_id: int) -> GoldRate:
    rate = session.get(GoldRate, rate_id)
    if rate is None:
        raise NotFoundError("Gold rate not found")
    return rate


def list_rates(session: Session, params: PageParams) -> Page[GoldRateRead]:
    return paginate(session, GoldRate, params, GOLD_RATE_SORT_FIELDS, GoldRateRead)


def create_rate(session: Session, data: GoldRateCreate, admin_id: int) -> GoldRate:
    """Publish a new active rate on behalf of `admin_id`."""
    if data.sell_price < data.buy_price:
        raise BadRequestError("Sell price cannot be lower than buy price")

    now = datetime.now(timezone.utc)
    previous = session.exec(select(GoldRate).where(GoldRate.is_active == True)).all()
    for old in previous:
        old.is_active = False
        old.updated_at = now
        session.add(old)

    rate = GoldRate(
        buy_price=data.buy_price,
        sell_price=data.sell_price,
        is_active=True,
        effective_date=data.effective_date or now,
        created_by=admin_id,
    )
    session.add(rate)
    session.commit()
    session.refresh(rate)

    logger.info(
        "Admin %s published gold rate %s (buy=%.2f sell=%.2f)",
        admin_id, rate.id, rate.buy_price, rate.sell_price,
    )
    return rate


def rate_statistics(session: Session) -> GoldRateStatistics:
    active = find_active_rate(session)
    total = session.exec(select(func.count()).select_from(GoldRate)).one()
    return GoldRateStatistics(
        active_rate=ActiveRateSummary.model_validate(active) if active else None,
        total_historical_rates=total,
        has_active_rate=active is not None,
    )
