# backend/entity_icons/middleware/request_logger.py
"""
Request logging middleware for FastAPI application.

Provides structured request/response logging with timing and
correlation IDs.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..enums import LogEmoji, LoggerName, LogSource
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.REQUEST_LOGGER, LogSource.MIDDLEWARE)

SLOW_REQUEST_SECONDS = 5.0


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware with performance metrics.

    Icon requests are high volume, so successful responses are logged at
    debug level; client and server errors are raised to warning/error.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

        # Paths to exclude from logging
        self.exclude_paths = {
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/favicon.ico",
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and log details with timing."""

        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.time()
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        logger.debug(
            f"{request.method} {request.url.path}",
            extra_context={
                "correlation_id": correlation_id,
                "query_params": dict(request.query_params),
            },
            emoji=LogEmoji.INCOMING,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            logger.error(
                f"{request.method} {request.url.path} -> FAILED ({duration_ms}ms)",
                error_context={
                    "correlation_id": correlation_id,
                    "exception_type": type(exc).__name__,
                },
            )
            raise

        duration = time.time() - start_time
        self._log_request_complete(request, response, duration, correlation_id)
        return response

    def _log_request_complete(
        self, request: Request, response: Response, duration: float, correlation_id: str
    ) -> None:
        status_code = response.status_code
        duration_ms = round(duration * 1000, 2)
        message = f"{request.method} {request.url.path} -> {status_code} ({duration_ms}ms)"
        context = {
            "correlation_id": correlation_id,
            "content_length": response.headers.get("content-length"),
        }

        if status_code >= 500:
            logger.error(message, error_context=context)
        elif status_code >= 400 and status_code != 404:
            logger.warning(message, extra_context=context)
        elif duration > SLOW_REQUEST_SECONDS:
            logger.warning(message, extra_context=context, emoji=LogEmoji.WARNING)
        else:
            logger.debug(message, extra_context=context, emoji=LogEmoji.OUTGOING)
