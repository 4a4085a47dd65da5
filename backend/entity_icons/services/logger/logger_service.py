"""
Centralized Logger Service for Entity Icons.

Thin, type-safe layer over loguru:
- Console output with emoji support
- Optional file logging with rotation
- Logger name and source bound into every record
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .constants import (
    CONSOLE_LOG_FORMAT,
    FILE_LOG_COMPRESSION,
    FILE_LOG_FORMAT,
    FILE_LOG_RETENTION,
    FILE_LOG_ROTATION,
)
from .formatters import LogMessageFormatter

_formatter = LogMessageFormatter()


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    log_file: Optional[str] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure loguru sinks for the application.

    Replaces any previously installed sinks so repeated calls (tests, reloads)
    do not duplicate output.

    Args:
        level: Minimum level written to every sink
        log_file: Optional path of a rotating file sink
        enable_console: Whether to write to stderr
    """
    logger.remove()
    logger.configure(
        extra={
            "logger_name": LoggerName.UNKNOWN.value,
            "source": LogSource.SYSTEM.value,
        }
    )

    if enable_console:
        logger.add(
            sys.stderr,
            level=level.value,
            format=CONSOLE_LOG_FORMAT,
            colorize=sys.stderr.isatty(),
        )

    if log_file:
        logger.add(
            log_file,
            level=level.value,
            format=FILE_LOG_FORMAT,
            rotation=FILE_LOG_ROTATION,
            retention=FILE_LOG_RETENTION,
            compression=FILE_LOG_COMPRESSION,
        )


def _emit(
    level: LogLevel,
    message: str,
    logger_name: LoggerName,
    source: LogSource,
    emoji: Optional[LogEmoji],
    context: Optional[Dict[str, Any]] = None,
    exception: Optional[BaseException] = None,
) -> None:
    text = _formatter.format_message(message, emoji)
    rendered_context = _formatter.format_context(context)
    if rendered_context:
        text = f"{text} [{rendered_context}]"

    bound = logger.bind(
        logger_name=logger_name.value,
        source=source.value,
        context=context or {},
    )
    if exception is not None:
        bound = bound.opt(exception=exception)
    bound.log(level.value, text)


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
):
    """
    Factory function to create a pre-configured logger for a specific service.

    Emoji priority system (highest to lowest):
    1. Direct: Emoji passed directly to log method call
    2. Instance-set: Default emoji set when creating the service logger
    3. Fallback: Default emoji based on log level

    Args:
        logger_name: The logger name enum to use for all calls
        source: The log source enum to use for all calls (defaults to SYSTEM)
        default_emoji: Instance-level default emoji that overrides level-based fallbacks

    Returns:
        ServiceLogger instance with error, warning, info, debug methods

    Example:
        logger = get_service_logger(LoggerName.ICON_PIPELINE, LogSource.PIPELINE)
        logger.error("Resize failed", exception=e, error_context={"size": "tiny"})
    """

    def _resolve_emoji(
        method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if default_emoji is not None:
            return default_emoji
        return fallback_emoji

    class ServiceLogger:
        name = logger_name

        @staticmethod
        def error(
            message: str,
            exception: Optional[BaseException] = None,
            error_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log an error, attaching the exception traceback when given."""
            _emit(
                LogLevel.ERROR,
                message,
                logger_name,
                source,
                _resolve_emoji(emoji, LogEmoji.ERROR),
                context=error_context,
                exception=exception,
            )

        @staticmethod
        def warning(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log a warning with emoji priority system."""
            _emit(
                LogLevel.WARNING,
                message,
                logger_name,
                source,
                _resolve_emoji(emoji, LogEmoji.WARNING),
                context=extra_context,
            )

        @staticmethod
        def info(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log an info message with emoji priority system."""
            _emit(
                LogLevel.INFO,
                message,
                logger_name,
                source,
                _resolve_emoji(emoji, LogEmoji.INFO),
                context=extra_context,
            )

        @staticmethod
        def debug(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log a debug message with emoji priority system."""
            _emit(
                LogLevel.DEBUG,
                message,
                logger_name,
                source,
                _resolve_emoji(emoji, LogEmoji.DEBUG),
                context=extra_context,
            )

    return ServiceLogger()
