"""Database models."""

from gold_portfolio.models.admin import Admin, AdminRole
from gold_portfolio.models.member import Member
from gold_portfolio.models.gold_rate import GoldRate
from gold_portfolio.models.trade import Trade, TradeType, TradeStatus

__all__ = [
    "Admin",
    "AdminRole",
    "Member",
    "GoldRate",
    "Trade",
    "TradeType",
    "TradeStatus",
]
