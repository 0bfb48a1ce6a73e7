"""Trade API: placing, approving and cancelling gold trades."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.models.admin import Admin
from gold_portfolio.models.member import Member
from gold_portfolio.models.trade import TradeStatus, TradeType
from gold_portfolio.schemas.auth import TokenPayload
from gold_portfolio.schemas.common import ApiResponse, Page, PageParams
from gold_portfolio.schemas.trade import TradeCreate, TradeRead, TradeStatistics, TradeStatusUpdate
from gold_portfolio.services import trades
from gold_portfolio.services.members import get_member
from gold_portfolio.api.deps import (
    get_current_admin,
    get_current_member,
    get_token_payload,
    page_params,
    require_admin,
)

router = APIRouter(prefix="/trades", tags=["trades"])


def my_trades_params(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=100, ge=1, le=100),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder", pattern="^(asc|desc)$"),
) -> PageParams:
    return PageParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)


@router.get("/statistics", response_model=ApiResponse[TradeStatistics], dependencies=[Depends(require_admin)])
def trade_statistics(
    member_id: int | None = Query(default=None, alias="memberId"),
    session: Session = Depends(get_session),
):
    data = trades.trade_statistics(session, member_id=member_id)
    return ApiResponse(message="Trade statistics retrieved", data=data)


@router.get("/my-trades", response_model=ApiResponse[Page[TradeRead]])
def my_trades(
    params: PageParams = Depends(my_trades_params),
    member: Member = Depends(get_current_member),
    session: Session = Depends(get_session),
):
    page = trades.list_trades(session, params, member_id=member.id)
    return ApiResponse(message="Trades retrieved", data=page)


@router.get("/member/{member_id}", response_model=ApiResponse[Page[TradeRead]], dependencies=[Depends(require_admin)])
def member_trades(
    member_id: int,
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    get_member(session, member_id)
    page = trades.list_trades(session, params, member_id=member_id)
    return ApiResponse(message="Trades retrieved", data=page)


@router.get("", response_model=ApiResponse[Page[TradeRead]], dependencies=[Depends(require_admin)])
def list_trades(
    member_id: int | None = Query(default=None, alias="memberId"),
    trade_type: TradeType | None = Query(default=None, alias="tradeType"),
    status: TradeStatus | None = Query(default=None),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    page = trades.list_trades(
        session,
        params,
        member_id=member_id,
        trade_type=trade_type,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )
    return ApiResponse(message="Trades retrieved", data=page)


@router.post("", response_model=ApiResponse[TradeRead], status_code=201)
def create_trade(
    data: TradeCreate,
    actor: TokenPayload = Depends(get_token_payload),
    session: Session = Depends(get_session),
):
    trade = trades.create_trade(session, data, actor)
    message = (
        "Sell request submitted for approval"
        if trade.status == TradeStatus.PENDING
        else "Trade created successfully"
    )
    return ApiResponse(message=message, data=TradeRead.model_validate(trade))


@router.get("/{trade_id}", response_model=ApiResponse[TradeRead], dependencies=[Depends(require_admin)])
def get_trade(trade_id: int, session: Session = Depends(get_session)):
    trade = trades.get_trade(session, trade_id)
    return ApiResponse(message="Trade retrieved", data=TradeRead.model_validate(trade))


@router.patch("/{trade_id}/status", response_model=ApiResponse[TradeRead])
def update_trade_status(
    trade_id: int,
    data: TradeStatusUpdate,
    admin: Admin = Depends(get_current_admin),
    session: Session = Depends(get_session),
):
    trade = trades.update_trade_status(session, trade_id, data, admin.id)
    verb = "approved" if trade.status == TradeStatus.COMPLETED else "rejected"
    return ApiResponse(message=f"Trade {verb} successfully", data=TradeRead.model_validate(trade))


@router.delete("/{trade_id}/cancel", response_model=ApiResponse[TradeRead])
def cancel_trade(
    trade_id: int,
    admin: Admin = Depends(get_current_admin),
    session: Session = Depends(get_session),
):
    trade = trades.cancel_trade(session, trade_id, admin.id)
    return ApiResponse(message="Trade cancelled successfully", data=TradeRead.model_validate(trade))
