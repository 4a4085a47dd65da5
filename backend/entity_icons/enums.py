# backend/entity_icons/enums.py
"""
Application Enums - Centralized enum definitions.

This module contains all enum definitions so that constants, models and
services can import them without creating circular dependencies.
"""

from enum import Enum


# =============================================================================
# ENTITY SYSTEMS
# =============================================================================


class EntityType(str, Enum):
    """Top-level entity kinds known to the entity store."""

    USER = "user"
    GROUP = "group"
    OBJECT = "object"
    SITE = "site"


# =============================================================================
# ICON SYSTEMS
# =============================================================================


class IconGenerationStatus(str, Enum):
    """Overall outcome of an icon generation batch."""

    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    FATAL = "fatal"


class IconVariantStatus(str, Enum):
    """Outcome of a single icon variant within a batch."""

    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


class IconFailureReason(str, Enum):
    """Reasons for a fatal icon generation outcome."""

    INVALID_ENTITY = "invalid_entity"
    NO_SOURCE = "no_source"
    SOURCE_UNREADABLE = "source_unreadable"


# =============================================================================
# LOGGING SYSTEMS
# =============================================================================


class LogLevel(str, Enum):
    """Log level constants for centralized logging system."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    API = "api"
    SYSTEM = "system"
    PIPELINE = "pipeline"
    MIDDLEWARE = "middleware"
    STORAGE = "storage"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    # Request/Response emojis
    INCOMING = "📥"
    OUTGOING = "📤"

    # Status emojis
    SUCCESS = "✅"
    FAILED = "❌"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"
    SKIPPED = "⏭️"

    # Work emojis
    PROCESSING = "🔄"

    # Image emojis
    IMAGE = "🖼️"
    THUMBNAIL = "🖼️"
    CROP = "✂️"

    # System emojis
    SYSTEM = "⚙️"
    STARTUP = "🚀"
    SHUTDOWN = "🛑"
    HEALTH = "💓"
    SECURITY = "🔒"
    CACHE = "🗄️"
    HOOK = "🪝"

    # Storage emojis
    STORAGE = "💾"
    NETWORK = "🌐"

    # Action Emojis
    CREATE = "➕"
    UPDATE = "✏️"
    DELETE = "🗑️"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    # API/Request loggers
    REQUEST_LOGGER = "request_logger"
    ERROR_HANDLER = "error_handler"
    MIDDLEWARE = "middleware"

    # Pipeline loggers
    ICON_PIPELINE = "icon_pipeline"

    # Service loggers
    ENTITY_SERVICE = "entity_service"
    FILESTORE_SERVICE = "filestore_service"
    ACCESS_SERVICE = "access_service"
    HOOK_SERVICE = "hook_service"

    # System loggers
    SYSTEM = "system"
    API = "api"
    UTILITY = "utility"
    UNKNOWN = "unknown"
