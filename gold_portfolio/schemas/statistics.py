"""Pydantic schemas for the admin dashboard."""

from gold_portfolio.schemas.common import CamelModel


class DashboardStatistics(CamelModel):
    total_members: int
    total_gold_holdings: float
    pending_sell_requests: int
