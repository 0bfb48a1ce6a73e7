"""Pydantic schemas for Trade API."""

from datetime import datetime

from pydantic import Field, field_validator

from gold_portfolio.models.trade import TradeStatus, TradeType
from gold_portfolio.schemas.common import CamelModel

TRADE_SORT_FIELDS = {
    "createdAt": "created_at",
    "quantity": "quantity",
    "totalAmount": "total_amount",
    "status": "status",
    "tradeType": "trade_type",
}


class TradeCreate(CamelModel):
    member_id: int | None = None  # members may omit it; defaults to themselves
    trade_type: TradeType
    quantity: float = Field(ge=0.001)
    notes: str | None = Field(default=None, max_length=500)
    status: TradeStatus | None = None  # admin only: PENDING queues the trade for approval

    @field_validator("status")
    @classmethod
    def _initial_status(cls, value: TradeStatus | None) -> TradeStatus | None:
        if value == TradeStatus.CANCELLED:
            raise ValueError("a new trade must be PENDING or COMPLETED")
        return value


class TradeStatusUpdate(CamelModel):
    status: TradeStatus
    notes: str | None = Field(default=None, max_length=500)


class TradeRead(CamelModel):
    id: int
    member_id: int
    trade_type: TradeType
    quantity: float
    rate_at_trade: float
    total_amount: float
    status: TradeStatus
    gold_rate_id: int
    initiated_by: int
    initiated_by_type: str
    approved_by: int | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class TradeVolume(CamelModel):
    total_quantity: float = 0.0
    total_amount: float = 0.0


class TradeStatistics(CamelModel):
    total_trades: int
    completed_trades: int
    pending_trades: int
    buy_trades: int
    sell_trades: int
    buy_volume: TradeVolume
    sell_volume: TradeVolume
