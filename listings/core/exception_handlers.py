"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the {success, data, message, errors} envelope.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from listings.core.config import get_settings
from listings.core.limiter import RATE_LIMIT_MESSAGE
from listings.domain.exceptions import ListingException
from listings.schemas.common import error_response

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "DUPLICATE_RESOURCE": 400,
    "INVALID_STATE_TRANSITION": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
}


def _listing_exception_handler(request: Request, exc: ListingException) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("Domain error %s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=error_response(exc.message))


def _format_validation_error(error: dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    msg = str(error.get("msg", "Invalid value"))
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 'Validation Error' with one message per failed field."""
    return JSONResponse(
        status_code=400,
        content=error_response(
            "Validation Error", [_format_validation_error(e) for e in exc.errors()]
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Starlette HTTP exceptions; unmatched routes become 'Not Found - <path>'."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Not Found - {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message),
        headers=getattr(exc, "headers", None),
    )


def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique-constraint violations not already mapped by a repository."""
    logger.warning("Unmapped integrity error: %s", exc.orig)
    return JSONResponse(
        status_code=400,
        content=error_response(
            "Duplicate field value entered", ["A record with this value already exists"]
        ),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(status_code=429, content=error_response(RATE_LIMIT_MESSAGE))


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    errors = [str(exc)] if settings.debug else None
    return JSONResponse(
        status_code=500,
        content=error_response("Internal server error", errors),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ListingException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    IntegrityError, RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(ListingException, _listing_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
