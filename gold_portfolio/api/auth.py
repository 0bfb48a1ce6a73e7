"""Authentication API for the admin and member portals."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gold_portfolio.database import get_session
from gold_portfolio.models.admin import Admin
from gold_portfolio.models.member import Member
from gold_portfolio.schemas.auth import (
    AdminLoginData,
    AdminProfile,
    AdminProfileData,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MemberLoginData,
    MemberProfile,
    MemberProfileData,
    RefreshData,
    RefreshRequest,
    ResetPasswordRequest,
)
from gold_portfolio.schemas.common import ApiResponse
from gold_portfolio.services import accounts
from gold_portfolio.services.auth import ADMIN_TOKEN, MEMBER_TOKEN
from gold_portfolio.api.deps import get_current_admin, get_current_member

router = APIRouter(prefix="/auth", tags=["auth"])


# --- admin portal ---

@router.post("/admin/login", response_model=ApiResponse[AdminLoginData])
def admin_login(body: LoginRequest, session: Session = Depends(get_session)):
    data = accounts.login_admin(session, body.email, body.password)
    return ApiResponse(message="Login successful", data=data)


@router.post("/admin/refresh", response_model=ApiResponse[RefreshData])
def admin_refresh(body: RefreshRequest, session: Session = Depends(get_session)):
    data = accounts.refresh_tokens(session, body.refresh_token, ADMIN_TOKEN)
    return ApiResponse(message="Token refreshed successfully", data=data)


@router.get("/admin/me", response_model=ApiResponse[AdminProfileData])
def admin_profile(admin: Admin = Depends(get_current_admin)):
    return ApiResponse(
        message="Profile retrieved",
        data=AdminProfileData(admin=AdminProfile.model_validate(admin)),
    )


@router.post("/admin/logout", response_model=ApiResponse[None])
def admin_logout():
    # Stateless JWT: the client discards its tokens
    return ApiResponse(message="Logged out successfully")


# --- member portal ---

@router.post("/member/login", response_model=ApiResponse[MemberLoginData])
def member_login(body: LoginRequest, session: Session = Depends(get_session)):
    data = accounts.login_member(session, body.email, body.password)
    return ApiResponse(message="Login successful", data=data)


@router.post("/member/refresh", response_model=ApiResponse[RefreshData])
def member_refresh(body: RefreshRequest, session: Session = Depends(get_session)):
    data = accounts.refresh_tokens(session, body.refresh_token, MEMBER_TOKEN)
    return ApiResponse(message="Token refreshed successfully", data=data)


@router.get("/member/me", response_model=ApiResponse[MemberProfileData])
def member_profile(member: Member = Depends(get_current_member)):
    return ApiResponse(
        message="Profile retrieved",
        data=MemberProfileData(member=MemberProfile.model_validate(member)),
    )


@router.post("/member/forgot-password", response_model=ApiResponse[None])
def forgot_password(body: ForgotPasswordRequest, session: Session = Depends(get_session)):
    message = accounts.request_password_reset(session, body.email)
    return ApiResponse(message=message)


@router.post("/member/reset-password", response_model=ApiResponse[None])
def reset_password(body: ResetPasswordRequest, session: Session = Depends(get_session)):
    message = accounts.reset_password(session, body.token, body.new_password)
    return ApiResponse(message=message)


@router.post("/member/change-password", response_model=ApiResponse[None])
def change_password(
    body: ChangePasswordRequest,
    member: Member = Depends(get_current_member),
    session: Session = Depends(get_session),
):
    accounts.change_password(session, member, body.current_password, body.new_password)
    return ApiResponse(message="Password changed successfully")


@router.post("/member/logout", response_model=ApiResponse[None])
def member_logout():
    return ApiResponse(message="Logged out successfully")
