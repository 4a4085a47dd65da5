"""
Centralized Logger Service Module.

Usage:
    from entity_icons.services.logger import get_service_logger
    from entity_icons.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.ICON_PIPELINE, LogSource.PIPELINE)
    logger.info("Generated icons", extra_context={"guid": 42})
"""

# Re-export commonly used enums for convenience
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .formatters import LogMessageFormatter
from .logger_service import get_service_logger, setup_logging

__all__ = [
    "get_service_logger",
    "setup_logging",
    "LogMessageFormatter",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
