"""Global error handling.

All exceptions are converted to one JSON shape:
``{error_code, message, user_message, suggestion, retry_allowed, details?}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from kakeibo.config import settings
from kakeibo.core.errors import get_error
from kakeibo.core.exceptions import KakeiboError, RemoteQueryError

logger = logging.getLogger(__name__)


def error_body(error_code: str, details: dict | None = None) -> dict:
    error_info = get_error(error_code)
    body = {
        "error_code": error_code,
        "message": error_info["message"],
        "user_message": error_info["user_message"],
        "suggestion": error_info["suggestion"],
        "retry_allowed": error_info["retry_allowed"],
    }
    if details:
        body["details"] = details
    return body


async def handle_kakeibo_error(request: Request, exc: KakeiboError) -> JSONResponse:
    """Handle application exceptions using the error catalog."""
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Request failed: {exc.error_code}", extra=extra)
    else:
        logger.warning(f"Request rejected: {exc.error_code}", extra=extra)

    # Query failures show the database's own message to the user.
    details = exc.details if isinstance(exc, RemoteQueryError) or settings.debug else None
    return JSONResponse(status_code=exc.http_status, content=error_body(exc.error_code, details))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic request validation errors."""
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "VAL_000",
            "message": " | ".join(error_messages),
            "user_message": "Invalid input data",
            "suggestion": "Please check your input and try again",
            "retry_allowed": True,
        },
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors."""
    # Do not log str(exc): it can include SQL + bound parameters.
    logger.error(
        f"Database integrity error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body("DB_002"))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body("DB_001")
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "SYS_001",
            "message": "Internal server error",
            "user_message": "An unexpected error occurred",
            "suggestion": "Please try again later",
            "retry_allowed": True,
        },
    )
