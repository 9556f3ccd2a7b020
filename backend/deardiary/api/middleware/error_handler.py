"""
Exception handlers translating errors into JSON responses.

Every error body has the shape {"error": "<message>"}. Unexpected exceptions
are logged with their traceback and reported with a generic message.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from deardiary.core.exceptions import AuthenticationError, DiaryError
from deardiary.core.utils import format_error

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."


def create_error_response(message: str, status_code: int) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(status_code=status_code, content=format_error(message))


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(DiaryError)
    async def diary_error_handler(request: Request, exc: DiaryError):
        if isinstance(exc, AuthenticationError):
            logger.info("%s %s rejected: %s", request.method, request.url.path, type(exc).__name__)
        elif exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, type(exc).__name__)
        else:
            logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        return create_error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Field-level details can echo request values back, so they are not returned
        logger.warning("Invalid request body for %s %s", request.method, request.url.path)
        return create_error_response("Invalid request body", 400)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return create_error_response(GENERIC_ERROR, 500)
