"""Pydantic schemas for GoldRate API."""

from datetime import datetime

from pydantic import Field

from gold_portfolio.schemas.common import CamelModel

GOLD_RATE_SORT_FIELDS = {
    "createdAt": "created_at",
    "effectiveDate": "effective_date",
    "buyPrice": "buy_price",
    "sellPrice": "sell_price",
}


class GoldRateCreate(CamelModel):
    buy_price: float = Field(ge=0)
    sell_price: float = Field(ge=0)
    effective_date: datetime | None = None  # defaults to now


class GoldRateRead(CamelModel):
    id: int
    buy_price: float
    sell_price: float
    is_active: bool
    effective_date: datetime
    created_by: int
    created_at: datetime
    updated_at: datetime


class ActiveRateSummary(CamelModel):
    buy_price: float
    sell_price: float
    effective_date: datetime


class GoldRateStatistics(CamelModel):
    active_rate: ActiveRateSummary | None
    total_historical_rates: int
    has_active_rate: bool
