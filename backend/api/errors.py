"""
Global exception handlers.

Maps the FolioError hierarchy to HTTP status codes. Every error response
is a JSON object with an ``error`` key; internal details never leave the
process.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    FolioError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

from .middleware.security_headers import SECURITY_HEADERS

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
_STATUS_BY_ERROR: tuple[tuple[type[FolioError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
    (ExternalServiceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: FolioError) -> int:
    """HTTP status code for a FolioError (500 when no base class matches)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def folio_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert a FolioError into ``{error, code}`` with the mapped status."""
    assert isinstance(exc, FolioError)

    status_code = status_for(exc)
    headers: dict[str, str] = {}

    if isinstance(exc, RateLimitError):
        headers["Retry-After"] = str(exc.retry_after)
    elif isinstance(exc, AuthenticationError):
        headers["WWW-Authenticate"] = "Bearer"

    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}")

    content = {"error": exc.message, "code": exc.code}
    if isinstance(exc, RateLimitError):
        content["retryAfter"] = exc.retry_after

    return JSONResponse(status_code=status_code, content=content, headers=headers or None)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render framework HTTP errors (404, 405...) as ``{error}``."""
    assert isinstance(exc, StarletteHTTPException)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail if isinstance(exc.detail, str) else str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed bodies and query parameters are a 400, not FastAPI's 422."""
    assert isinstance(exc, RequestValidationError)

    logger.info(f"Invalid request format on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request format", "code": "INVALID_REQUEST"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return an opaque 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
        headers=SECURITY_HEADERS,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(FolioError, folio_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
