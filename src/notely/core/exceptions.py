"""
Domain errors and the handlers that turn them into JSON responses.

Every failure leaves the API as ``{"error": "<message>"}`` with the status
code carried by the exception class.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging import get_logger


class NotelyError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(NotelyError):
    """Missing or malformed required field."""

    default_message = "validation failed"


class InvalidId(NotelyError):
    """Identifier does not match the storage id syntax."""

    default_message = "malformatted id"


class NotFound(NotelyError):
    """Well-formed id with no matching record."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class Unauthorized(NotelyError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "token missing or invalid"


class Forbidden(NotelyError):
    """Authenticated user is not allowed to touch the record."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "only the owner can modify this note"


class DuplicateUsername(NotelyError):
    """Username collides with an existing user."""

    default_message = "expected `username` to be unique"


def _error_body(message: str) -> Dict[str, Any]:
    return {"error": message}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "validation failed"
    first = errors[0]
    # drop the "body" prefix so the message names the field
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    msg = first.get("msg", "invalid value")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON error handlers on the app."""
    logger = get_logger("errors")

    @app.exception_handler(NotelyError)
    async def _notely_error_handler(request: Request, exc: NotelyError):
        logger.info(
            "Request rejected",
            extra={
                "error_type": type(exc).__name__,
                "status_code": exc.status_code,
                "path": request.url.path,
            },
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return JSONResponse(
            status_code=exc.status_code, content=_error_body(exc.message), headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(_first_validation_message(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail) if exc.detail else "http error"),
        )

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("internal server error"),
        )
