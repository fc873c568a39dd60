"""Global exception handlers for consistent error responses.

Every error body has the shape ``{"error": {"code", "message", "request_id",
"details"?}}``. Domain errors map to a status by type; anything else is a
generic 500 so no internals leak to clients.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from registry_gate.core.errors import (
    AcquireCancelledError,
    AppError,
    SubmissionFailedError,
)
from registry_gate.core.logging import get_request_id

logger = logging.getLogger(__name__)

# Checked in order; first match wins, ValidationAppError and others fall to 400
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (AcquireCancelledError, 503),
    (SubmissionFailedError, 502),
)


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError.

    - ValidationAppError (incl. ConfigurationAppError) → 400
    - AcquireCancelledError → 503 with Retry-After, the gate stayed saturated
    - SubmissionFailedError → 502, the registry rejected or was unreachable
    """
    status_code = next(
        (status for error_type, status in _STATUS_BY_ERROR if isinstance(exc, error_type)),
        400,
    )

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "request_path": request.url.path,
            "has_details": bool(exc.details),
        },
    )

    headers = None
    if isinstance(exc, AcquireCancelledError):
        retry_after = (exc.details or {}).get("retry_after") or 0
        headers = {"Retry-After": str(max(1, math.ceil(retry_after)))}

    return _error_response(status_code, exc.code, exc.message, dict(exc.details or {}), headers)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log with traceback, answer with a generic 500."""
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_method": request.method,
            "request_path": request.url.path,
        },
    )
    return _error_response(
        500,
        "internal_server_error",
        "An unexpected error occurred. Please try again later.",
    )


def setup_exception_handlers(app) -> None:
    """Register the AppError handler and the catch-all fallback on ``app``."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
