"""
API error taxonomy and the handlers that render it.

Every failure reaches the client as JSON ``{"message": ...}`` with the
HTTP status of its category. No structured error codes are returned.

  ValidationError   400  missing / malformed input
  Unauthenticated   401  missing, invalid or expired token; bad credentials
  Forbidden         403  authenticated but not owner or admin
  NotFound          404
  Conflict          409  duplicate email
  InternalError     500  unexpected store / hashing failure
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Pydantic error types that mean "the client left this field out".
_MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


class APIError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class Unauthenticated(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(APIError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


def _message_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def describe_validation_errors(errors: list[dict]) -> str:
    """
    Collapse pydantic errors into one user-facing message.

    Missing or empty required fields are named; anything else is reported
    generically.
    """
    missing: list[str] = []
    for error in errors:
        if error.get("type") not in _MISSING_ERROR_TYPES:
            return ValidationError.default_message
        loc = [part for part in error.get("loc", ()) if part != "body"]
        field = ".".join(str(part) for part in loc)
        if field and field not in missing:
            missing.append(field)

    if not missing:
        return ValidationError.default_message
    return "Missing fields: " + ", ".join(missing)


# ── Handlers ────────────────────────────────────────────────
async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    return _message_response(exc.status_code, exc.message, exc.headers)


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _message_response(
        status.HTTP_400_BAD_REQUEST,
        describe_validation_errors(list(exc.errors())),
    )


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _message_response(exc.status_code, str(exc.detail), exc.headers)


async def unhandled_error_handler(request: Request, _exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _message_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register every handler on the app."""
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
