# backend/entity_icons/exceptions.py
"""
Custom exceptions for Entity Icons.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""


class EntityIconsError(Exception):
    """Base exception for all Entity Icons errors."""

    pass


class InvalidEntityError(EntityIconsError):
    """Raised when an object is not a recognized entity."""

    pass


class EntityNotFoundError(EntityIconsError):
    """Raised when an entity cannot be found (or is not visible)."""

    pass


class InvalidAttributeError(EntityIconsError):
    """Raised when an attribute name cannot be set on an entity."""

    pass


class IconSourceError(EntityIconsError):
    """Raised when an icon source cannot be resolved or read."""

    pass


class IconGenerationError(EntityIconsError):
    """Raised when a single icon variant cannot be produced."""

    pass


class IconEncodingError(IconGenerationError):
    """Raised when an icon variant cannot be encoded."""

    pass


class FilestoreError(EntityIconsError):
    """Raised for filestore read/write failures and invalid filenames."""

    pass


class ConfigurationError(EntityIconsError):
    """Raised for invalid icon size tables and other configuration errors."""

    pass
