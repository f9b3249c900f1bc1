"""Centralized error handling with the API's failure envelope.

This module provides:
1. Error codes for the different kinds of failures
2. Consistent ``{success: false, message, error}`` responses
3. Logging of request context for unexpected failures
"""

import logging
from uuid import UUID, uuid4

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from thinkscope.config.settings import get_settings
from thinkscope.exceptions import ConflictError, ResourceNotFoundError
from thinkscope.schemas import ErrorEnvelope


logger = logging.getLogger(__name__)


class ErrorCode:
    """Specific error codes for better client handling."""

    INVALID_INPUT = "INVALID_INPUT"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL = "INTERNAL_ERROR"


_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.INVALID_INPUT,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTH_REQUIRED,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorCode.RATE_LIMIT_EXCEEDED,
}


def format_error_response(
    message: str,
    status_code: int,
    code: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Format a consistent error response."""
    content = ErrorEnvelope(message=message, error=code).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_from_loc(loc: tuple) -> str:
    """Turn a pydantic error location into the offending field name."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors and domain validation errors."""
    logger.info(f"Validation error on {request.method} {request.url.path}", extra={"error": str(exc)})

    if isinstance(exc, RequestValidationError):
        errors = exc.errors()
        field = _field_from_loc(tuple(errors[0]["loc"])) if errors else "body"
        message = f"Invalid value for '{field}': {errors[0]['msg']}" if errors else "Invalid request"
        return format_error_response(message, status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_INPUT)

    return format_error_response(str(exc), status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_INPUT)


async def handle_not_found_errors(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    """Handle missing topics and problems."""
    logger.info(f"Not found on {request.method} {request.url.path}: {exc.resource_type} {exc.resource_id}")
    return format_error_response(str(exc), status.HTTP_404_NOT_FOUND, ErrorCode.NOT_FOUND)


async def handle_conflict_errors(request: Request, exc: ConflictError) -> JSONResponse:
    """Handle uniqueness races; the client should re-read instead of retrying."""
    logger.warning(f"Conflict on {request.method} {request.url.path}: {exc}")
    return format_error_response(str(exc), status.HTTP_409_CONFLICT, ErrorCode.CONFLICT)


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPExceptions (auth failures, unknown routes) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)

    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.warning(
            "Authentication failed for %s %s: %s",
            request.method,
            request.url.path,
            message,
            extra={"client_host": request.client.host if request.client else "unknown"},
        )

    return format_error_response(
        message,
        exc.status_code,
        _STATUS_CODES.get(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def handle_rate_limit_errors(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi rejections on the auth endpoints."""
    logger.warning(f"Rate limit exceeded on {request.method} {request.url.path}: {exc.detail}")
    return format_error_response(
        f"Too many requests, limit is {exc.detail}",
        status.HTTP_429_TOO_MANY_REQUESTS,
        ErrorCode.RATE_LIMIT_EXCEEDED,
    )


async def handle_database_errors(request: Request, exc: Exception) -> JSONResponse:
    """Handle database-related errors."""
    if isinstance(exc, IntegrityError) and "unique" in str(exc).lower():
        logger.warning(f"Unique violation on {request.method} {request.url.path}: {exc.orig}")
        return format_error_response("This resource already exists", status.HTTP_409_CONFLICT, ErrorCode.CONFLICT)

    error_id = uuid4()
    log_error_context(request, exc, error_id)

    if isinstance(exc, OperationalError):
        return _internal_error_response(exc, error_id, "Database unavailable")

    return _internal_error_response(exc, error_id, "A database error occurred")


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled errors."""
    error_id = uuid4()
    log_error_context(request, exc, error_id)
    return _internal_error_response(exc, error_id, "Internal server error")


def _internal_error_response(exc: Exception, error_id: UUID, message: str) -> JSONResponse:
    """Generic 500; the cause is only exposed when DEBUG is on."""
    content = {"success": False, "message": message, "error": ErrorCode.INTERNAL, "errorId": str(error_id)}
    if get_settings().DEBUG:
        content["detail"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# === Utility Functions ===


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log comprehensive error context for debugging."""
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "user_id": str(getattr(request.state, "user_id", None)),
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    # Add request headers (excluding sensitive ones)
    safe_headers = {
        k: v for k, v in request.headers.items() if k.lower() not in ["authorization", "cookie", "x-api-key"]
    }
    context["headers"] = safe_headers

    logger.error("Request failed", extra=context, exc_info=(type(exc), exc, exc.__traceback__))
