"""System API: health check."""

from fastapi import APIRouter

from gold_portfolio.schemas.common import ApiResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=ApiResponse[dict])
def health_check():
    return ApiResponse(message="ok", data={"status": "ok"})
