# backend/entity_icons/constants.py
"""
Global Constants for Entity Icons

Centralized location for application constants to avoid hardcoded values
throughout the codebase.
"""

from typing import Any, Dict, FrozenSet, Tuple

from .enums import EntityType

# =============================================================================
# ENTITY ATTRIBUTES
# =============================================================================

ICONTIME_ATTRIBUTE = "icontime"
CROP_COORDINATE_ATTRIBUTES: Tuple[str, ...] = ("x1", "y1", "x2", "y2")
RESERVED_ICON_ATTRIBUTES: FrozenSet[str] = frozenset(
    (ICONTIME_ATTRIBUTE,) + CROP_COORDINATE_ATTRIBUTES
)

# Core entity fields that may never be overwritten through the attribute bag
CORE_ENTITY_FIELDS: FrozenSet[str] = frozenset(
    {"guid", "type", "subtype", "owner_guid", "mimetype", "enabled", "filename"}
)

FILE_SUBTYPE = "file"

# =============================================================================
# ICON SIZES
# =============================================================================

MASTER_SIZE_NAME = "master"
DEFAULT_SERVE_SIZE = "medium"

# Size names that are always cover-cropped, regardless of their own flag
CROPPABLE_SIZE_NAMES: FrozenSet[str] = frozenset(
    {"topbar", "tiny", "small", "medium", "large"}
)

# Built-in table for entities with the "file" subtype
FILE_ICON_SIZES: Dict[str, Dict[str, Any]] = {
    "thumb": {
        "width": 60,
        "height": 60,
        "croppable": True,
        "upscale": True,
        "metadata_field": "thumbnail",
    },
    "smallthumb": {
        "width": 153,
        "height": 153,
        "croppable": True,
        "upscale": True,
        "metadata_field": "smallthumb",
    },
    "largethumb": {
        "width": 600,
        "height": 600,
        "croppable": True,
        "upscale": True,
        "metadata_field": "largethumb",
    },
}

# Site-wide default table for every other entity
DEFAULT_SITE_ICON_SIZES: Dict[str, Dict[str, Any]] = {
    "topbar": {"width": 16, "height": 16, "croppable": True, "upscale": True},
    "tiny": {"width": 25, "height": 25, "croppable": True, "upscale": True},
    "small": {"width": 40, "height": 40, "croppable": True, "upscale": True},
    "medium": {"width": 100, "height": 100, "croppable": True, "upscale": True},
    "large": {"width": 200, "height": 200, "croppable": True, "upscale": True},
    "master": {"width": 550, "height": 550, "croppable": False, "upscale": False},
}

DEFAULT_MASTER_WIDTH = 550
DEFAULT_MASTER_HEIGHT = 550

# =============================================================================
# FILESTORE LAYOUT
# =============================================================================

ICON_PREFIX_BY_ENTITY_TYPE: Dict[EntityType, str] = {
    EntityType.USER: "profile/",
    EntityType.GROUP: "groups/",
}
DEFAULT_ICON_PREFIX = "icons/"
GROUP_MASTER_FILENAME_TEMPLATE = "groups/{guid}.jpg"
LEGACY_SERVE_FILENAME_TEMPLATE = "icons/{guid}{size}.jpg"

# =============================================================================
# ENCODING
# =============================================================================

DEFAULT_ICON_MIMETYPE = "image/jpeg"
DEFAULT_JPEG_QUALITY = 80

# mimetype -> (Pillow format, file extension)
ICON_FORMATS_BY_MIMETYPE: Dict[str, Tuple[str, str]] = {
    "image/jpeg": ("JPEG", ".jpg"),
    "image/gif": ("GIF", ".gif"),
    "image/png": ("PNG", ".png"),
}
DEFAULT_ICON_FORMAT: Tuple[str, str] = ICON_FORMATS_BY_MIMETYPE[DEFAULT_ICON_MIMETYPE]
ICON_EXTENSIONS: Tuple[str, ...] = (".jpg", ".gif", ".png")

# =============================================================================
# HTTP CACHING
# =============================================================================

ICON_CACHE_EXPIRES_SECONDS = 864000  # 10 days
CACHE_CONTROL_PUBLIC = "public"
PRAGMA_PUBLIC = "public"

# =============================================================================
# HOOKS
# =============================================================================

ICON_SIZES_HOOK = "entity:icon:sizes"
HOOK_TYPE_ALL = "all"
DEFAULT_HOOK_PRIORITY = 500

# =============================================================================
# REMOTE SOURCES
# =============================================================================

REMOTE_SOURCE_SCHEMES: FrozenSet[str] = frozenset({"http", "https"})
DEFAULT_REMOTE_TIMEOUT_SECONDS = 15
