"""
Logger Service Constants

Local constants for the logger service to avoid hardcoded values
and provide centralized configuration for logger-specific settings.
"""

# ====================================================================
# SINK FORMATS
# ====================================================================

CONSOLE_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> | "
    "{message}"
)
FILE_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[source]}:{extra[logger_name]} | {name}:{function}:{line} - {message}"
)

# ====================================================================
# FILE SINK ROTATION
# ====================================================================

FILE_LOG_ROTATION = "10 MB"
FILE_LOG_RETENTION = "7 days"
FILE_LOG_COMPRESSION = "zip"

# ====================================================================
# MESSAGE FORMATTER CONSTANTS
# ====================================================================

MAX_CONTEXT_ITEMS = 5
MAX_CONTEXT_VALUE_LENGTH = 200
CONTEXT_TRUNCATE_SUFFIX = "..."
CONTEXT_SEPARATOR = " | "
