"""Member management API (admin only)."""

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.schemas.common import ApiResponse, Page, PageParams
from gold_portfolio.schemas.member import MemberCreate, MemberRead, MemberStats, MemberUpdate
from gold_portfolio.services import members
from gold_portfolio.api.deps import page_params, require_admin

router = APIRouter(prefix="/members", tags=["members"], dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=ApiResponse[MemberStats])
def member_stats(session: Session = Depends(get_session)):
    return ApiResponse(message="Member statistics retrieved", data=members.member_stats(session))


@router.get("/search", response_model=ApiResponse[Page[MemberRead]])
def search_members(
    q: str = Query(default=""),
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    return ApiResponse(message="Members retrieved", data=members.search_members(session, q, params))


@router.get("", response_model=ApiResponse[Page[MemberRead]])
def list_members(
    active_only: bool = Query(default=False, alias="activeOnly"),
    params: PageParams = Depends(page_params),
    session: Session = Depends(get_session),
):
    page = members.list_members(session, params, active_only=active_only)
    return ApiResponse(message="Members retrieved", data=page)


@router.post("", response_model=ApiResponse[MemberRead], status_code=201)
def create_member(data: MemberCreate, session: Session = Depends(get_session)):
    member = members.create_member(session, data)
    return ApiResponse(message="Member created successfully", data=MemberRead.model_validate(member))


@router.get("/{member_id}", response_model=ApiResponse[MemberRead])
def get_member(member_id: int, session: Session = Depends(get_session)):
    member = members.get_member(session, member_id)
    return ApiResponse(message="Member retrieved", data=MemberRead.model_validate(member))


@router.put("/{member_id}", response_model=ApiResponse[MemberRead])
def update_member(member_id: int, data: MemberUpdate, session: Session = Depends(get_session)):
    member = members.update_member(session, member_id, data)
    return ApiResponse(message="Member updated successfully", data=MemberRead.model_validate(member))


@router.patch("/{member_id}/toggle-status", response_model=ApiResponse[MemberRead])
def toggle_member_status(member_id: int, session: Session = Depends(get_session)):
    member = members.toggle_member_status(session, member_id)
    state = "activated" if member.is_active else "deactivated"
    return ApiResponse(message=f"Member {state} successfully", data=MemberRead.model_validate(member))


@router.delete("/{member_id}", response_model=ApiResponse[MemberRead])
def delete_member(member_id: int, session: Session = Depends(get_session)):
    member = members.deactivate_member(session, member_id)
    return ApiResponse(message="Member deactivated successfully", data=MemberRead.model_validate(member))
