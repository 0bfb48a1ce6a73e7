"""Trade model: a BUY or SELL of gold against a member's holdings."""

from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(str, Enum):
    PENDING = "PENDING"  # waiting for admin approval
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    member_id: int = Field(foreign_key="member.id", index=True)
    trade_type: TradeType = Field(index=True)
    quantity: float  # grams
    rate_at_trade: float
    total_amount: float  # quantity * rate_at_trade
    status: TradeStatus = Field(default=TradeStatus.COMPLETED, index=True)
    gold_rate_id: int = Field(foreign_key="gold_rate.id")
    initiated_by: int  # admin.id or member.id, see initiated_by_type
    initiated_by_type: str  # "admin" or "member"
    approved_by: int | None = Field(default=None, foreign_key="admin.id")
    notes: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
