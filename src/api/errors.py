"""
Error envelope - JSON error responses and global exception handlers.

Every error leaves the API as:

    {"success": false, "message": ..., "errors"?: [{field, message}], "error"?: ...}

Expected failures (validation, duplicates, not found, store outages) are
turned into envelopes by the routes themselves. The handlers registered here
cover what escapes them: unknown routes, malformed request bodies and any
uncaught exception.
"""

import logging
from collections.abc import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.api.models import ErrorResponse, FieldError
from src.config.settings import Settings
from src.domain.ports import FieldViolation

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Internal server error"


def error_response(
    status_code: int,
    message: str,
    errors: Iterable[FieldViolation] | None = None,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error envelope."""
    body = ErrorResponse(
        message=message,
        errors=[FieldError.from_violation(v) for v in errors] if errors is not None else None,
        error=error,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def error_detail(exc: Exception, settings: Settings) -> str:
    """Exception message in development, a fixed string otherwise."""
    return str(exc) if settings.is_development else GENERIC_ERROR_DETAIL


def server_error_response(message: str, exc: Exception, settings: Settings) -> JSONResponse:
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message,
        error=error_detail(exc, settings),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes and methods become a plain 404 envelope."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, "Route not found")
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Requests FastAPI could not parse (e.g. a JSON body that is not an object)."""
    logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
    violations = [
        FieldViolation(
            field=".".join(str(part) for part in e["loc"] if part != "body") or "body",
            message=e["msg"],
        )
        for e in exc.errors()
    ]
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request body", errors=violations
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Catch-all - full detail goes to the log, never to production clients.

    Must be installed inside the CORS middleware so that 500 responses carry
    its headers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            settings: Settings = request.app.state.settings
            return server_error_response("Something went wrong!", exc, settings)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_middleware(UnhandledErrorMiddleware)
