# =============================================================================
# app/exceptions.py - Error Taxonomy and Exception Handlers
# =============================================================================
# Every error that leaves a route ends up here. The handlers normalize it into
# a single JSON envelope:
#
#   {"statusCode": 404, "message": "The requested address was not found"}
#
# Routers raise the variants below (or a plain HTTPException); anything else
# is reported as a 500 with a generic message.
# =============================================================================

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _reason(status_code: int) -> str:
    """Standard reason phrase for a status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Error"


class BlogAPIException(Exception):
    """
    Base exception for the blog API.

    Carries the HTTP status code and the message sent back to the client.
    """

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if status_code is not None:
            self.status_code = status_code
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# Client Errors
# =============================================================================

class NotFoundError(BlogAPIException):
    """Raised when no route matches the request, or a resource doesn't exist."""

    status_code = 404
    default_message = "The requested address was not found"


class InvalidInputError(BlogAPIException):
    """Raised when the request body or parameters can't be used."""

    status_code = 400
    default_message = "Bad Request"


class PayloadTooLargeError(BlogAPIException):
    """Raised when the request body exceeds the configured limit."""

    status_code = 413
    default_message = "Payload Too Large"


class HTTPError(BlogAPIException):
    """
    Error with an arbitrary status code.

    Used for statuses without a dedicated variant (401, 403, 409, ...).
    The message defaults to the status reason phrase.
    """

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or _reason(status_code), status_code=status_code)


# =============================================================================
# Server Errors
# =============================================================================

class InternalServerError(BlogAPIException):
    """Unexpected failure inside the application."""

    status_code = 500
    default_message = "Internal Server Error"


class UpstreamError(BlogAPIException):
    """A service the API depends on failed."""

    status_code = 502
    default_message = "Bad Gateway"


class DatabaseUnavailableError(UpstreamError):
    """Raised when a handler needs MongoDB and the connection isn't ready."""

    status_code = 503
    default_message = "Database is not available"


# =============================================================================
# Error Envelope
# =============================================================================

class ErrorResponse(BaseModel):
    """JSON body returned for every error."""
    statusCode: int
    message: str


def to_error_response(exc: Exception) -> ErrorResponse:
    """
    Map any exception onto the error envelope.

    - BlogAPIException variants carry their own status and message
    - HTTPException (Starlette/FastAPI) uses status_code and detail
    - Request validation errors become 422 with the first error message
    - Anything else is an internal error

    An empty message falls back to the generic internal error message,
    whatever the status.
    """
    if isinstance(exc, BlogAPIException):
        status_code, message = exc.status_code, exc.message
    elif isinstance(exc, StarletteHTTPException):
        status_code = exc.status_code
        message = exc.detail if isinstance(exc.detail, str) else ""
    elif isinstance(exc, RequestValidationError):
        status_code = 422
        message = _format_validation_errors(exc)
    else:
        status_code, message = InternalServerError.status_code, InternalServerError.default_message

    return ErrorResponse(
        statusCode=status_code,
        message=message or InternalServerError.default_message,
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation error"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")


# =============================================================================
# Exception Handlers
# =============================================================================

async def error_to_json_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Terminal error handler: convert any exception to the JSON envelope.

    Server errors are logged with their traceback; client errors are
    logged at INFO since they are expected traffic.
    """
    error = to_error_response(exc)

    if error.statusCode >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed with {error.statusCode}",
            exc_info=exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {error.statusCode}: {error.message}")

    # Keep Allow / WWW-Authenticate headers set on HTTPException
    headers = exc.headers if isinstance(exc, StarletteHTTPException) else None

    return JSONResponse(status_code=error.statusCode, content=error.model_dump(), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    HTTPException handler.

    A wrong method on an existing path is treated like any other
    unmatched request: 404 instead of 405.
    """
    if exc.status_code == 405:
        return await error_to_json_handler(request, NotFoundError())
    return await error_to_json_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route the taxonomy, HTTPException and validation errors through
    error_to_json_handler.

    Unexpected exceptions are converted by ErrorEnvelopeMiddleware, which
    sits inside the CORS middleware so 500 responses keep CORS headers.
    """
    app.add_exception_handler(BlogAPIException, error_to_json_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, error_to_json_handler)
