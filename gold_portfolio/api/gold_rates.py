"""Gold rate API. Any signed-in user can read rates; only admins publish them."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.models.admin import Admin
from gold_portfolio.schemas.common import ApiResponse, Page, PageParams
from gold_portfolio.schemas.gold_rate import GoldRateCreate, GoldRateRead, GoldRateStatistics
from gold_portfolio.services import gold_rates
from gold_portfolio.api.deps import get_current_admin, get_token_payload, page_params

router = APIRouter(
    prefix="/gold-rates", tags=["gold-rates"], dependencies=[Depends(get_token_payload)]
)


@router.get("/active", response_model=ApiResponse[GoldRateRead])
def active_rate(session: Session = Depends(get_session)):
    rate = gold_rates.get_active_rate(session)
    return ApiResponse(message="Active gold rate retrieved", data=GoldRateRead.model_validate(rate))


@router.get("/statistics", response_model=ApiResponse[GoldRateStatistics])
def rate_statistics(session: Session = Depends(get_session)):
    return ApiResponse(message="Gold rate statistics retrieved", data=gold_rates.rate_statistics(session))


@router.get("", response_model=ApiResponse[Page[GoldRateRead]])
def list_rates(params: PageParams = Depends(page_params), session: Session = Depends(get_session)):
    return ApiResponse(message="Gold rates retrieved", data=gold_rates.list_rates(session, params))


@router.post("", response_model=ApiResponse[GoldRateRead], status_code=201)
def create_rate(
    data: GoldRateCreate,
    admin: Admin = Depends(get_current_admin),
    session: Session = Depends(get_session),
):
    rate = gold_rates.create_rate(session, data, admin.id)
    return ApiResponse(message="Gold rate created successfully", data=GoldRateRead.model_validate(rate))


@router.get("/{rate_id}", response_model=ApiResponse[GoldRateRead])
def get_rate(rate_id: int, session: Session = Depends(get_session)):
    rate = gold_rates.get_rate(session, rate_id)
    return ApiResponse(message="Gold rate retrieved", data=GoldRateRead.model_validate(rate))
