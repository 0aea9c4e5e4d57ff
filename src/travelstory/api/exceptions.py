"""Exception handlers for the Travel Story API.

Every error response has the body ``{"error": true, "message": "..."}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from travelstory.services.errors import StoryServiceError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(message)


class UnauthorizedError(APIError):
    """Authentication required."""

    def __init__(self, message: str = "Access denied. No token provided."):
        super().__init__(message, status_code=401, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(APIError):
    """Credentials present but not acceptable."""

    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(message, status_code=403)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message},
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return error_response(exc.status_code, exc.message, exc.headers)


async def service_error_handler(request: Request, exc: StoryServiceError) -> JSONResponse:
    """Handle service-layer errors using the status each one carries."""
    return error_response(exc.status_code, exc.message)


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid value")
    if error.get("type") == "missing":
        return f"{location} is required" if location else "All fields required"
    return f"{location}: {message}" if location else message


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body and query validation errors."""
    errors = exc.errors()
    message = _describe(errors[0]) if errors else "Invalid request"
    return error_response(400, message)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error", exc_info=exc)
    return error_response(500, "Server error, please try again later.")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StoryServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
