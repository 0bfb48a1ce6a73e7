"""Dashboard API: headline figures for the admin portal."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.schemas.common import ApiResponse
from gold_portfolio.schemas.statistics import DashboardStatistics
from gold_portfolio.services.statistics import dashboard_statistics
from gold_portfolio.api.deps import require_admin

router = APIRouter(prefix="/statistics", tags=["statistics"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=ApiResponse[DashboardStatistics])
def dashboard(session: Session = Depends(get_session)):
    return ApiResponse(message="Dashboard statistics retrieved", data=dashboard_statistics(session))
