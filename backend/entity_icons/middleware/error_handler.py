# backend/entity_icons/middleware/error_handler.py
"""
Error handling middleware for FastAPI application.

Provides centralized error handling, logging, and user-friendly error responses
while maintaining security by not exposing internal details.
"""

import traceback
import uuid

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import settings
from ..enums import LogEmoji, LoggerName, LogSource
from ..exceptions import (
    ConfigurationError,
    EntityIconsError,
    EntityNotFoundError,
    InvalidAttributeError,
)
from ..services.logger import get_service_logger
from ..utils.time_utils import utc_now

logger = get_service_logger(LoggerName.ERROR_HANDLER, LogSource.MIDDLEWARE)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Centralized error handling middleware.

    Catches all unhandled exceptions, logs them with correlation IDs,
    and returns user-friendly error responses.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.debug_mode = settings.environment == "development"

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and handle any errors that occur."""

        # Generate correlation ID for request tracking
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            return await call_next(request)

        except Exception as exc:
            self._log_error(exc, request, correlation_id)
            return self._create_error_response(exc, correlation_id)

    def _log_error(self, exc: Exception, request: Request, correlation_id: str) -> None:
        """Log error with request context and correlation ID."""
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}",
            exception=exc,
            error_context={
                "correlation_id": correlation_id,
                "exception_type": type(exc).__name__,
                "query_params": dict(request.query_params),
                "client_ip": getattr(request.client, "host", "unknown"),
                "traceback": traceback.format_exc() if self.debug_mode else None,
            },
            emoji=LogEmoji.ERROR,
        )

    def _error_body(self, error_type: str, message: str, correlation_id: str, **extra):
        return {
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": correlation_id,
                "timestamp": utc_now().isoformat(),
                **extra,
            }
        }

    def _create_error_response(self, exc: Exception, correlation_id: str) -> JSONResponse:
        """Create appropriate error response based on exception type."""

        if isinstance(exc, HTTPException):
            return JSONResponse(
                status_code=exc.status_code,
                content=self._error_body(
                    "http_error", str(exc.detail), correlation_id, status_code=exc.status_code
                ),
            )

        if isinstance(exc, ValidationError):
            details = [
                {
                    "field": " -> ".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ]
            return JSONResponse(
                status_code=422,
                content=self._error_body(
                    "validation_error", "Request validation failed", correlation_id, details=details
                ),
            )

        if isinstance(exc, EntityNotFoundError):
            return JSONResponse(
                status_code=404,
                content=self._error_body("not_found", str(exc), correlation_id),
            )

        if isinstance(exc, (ConfigurationError, InvalidAttributeError)):
            return JSONResponse(
                status_code=400,
                content=self._error_body("bad_request", str(exc), correlation_id),
            )

        message = "An internal error occurred"
        if self.debug_mode:
            message = f"{type(exc).__name__}: {exc}"
        error_type = "icon_error" if isinstance(exc, EntityIconsError) else "internal_error"
        return JSONResponse(
            status_code=500,
            content=self._error_body(error_type, message, correlation_id),
        )
