"""
Centralized error handlers.

Every failure leaves the API in the same envelope as a success:
{"success": false, "message": ..., "data": ...}. No stack traces or
internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gold_portfolio.services.errors import ServiceError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_500 = 500


def _error_response(status_code: int, message: str, data: dict | None = None) -> JSONResponse:
    """Build a consistent JSON error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": data},
    )


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def register_error_handlers(app: FastAPI) -> None:
    """Register the envelope-producing handlers on the application."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(_request: Request, exc: ServiceError) -> JSONResponse:
        if exc.status_code >= HTTP_500:
            logger.error("Service error: %s", exc.message)
        else:
            logger.info("Request rejected (%d): %s", exc.status_code, exc.message)
        data = {"code": exc.code} if exc.code else None
        return _error_response(exc.status_code, exc.message, data)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error_response(HTTP_400, "Validation failed", {"errors": errors})

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
