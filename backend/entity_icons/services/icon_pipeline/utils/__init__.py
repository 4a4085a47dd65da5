"""
Icon Pipeline Utilities
"""

from .icon_utils import (
    build_icon_filename,
    calculate_cover_dimensions,
    calculate_inside_dimensions,
    crop_center,
    crop_rectangle,
    encode_image,
    icon_format_for_mimetype,
    icon_owner_guid,
    resolve_filestore_prefix,
    scale_inside,
    scale_to_cover,
)

__all__ = [
    "build_icon_filename",
    "calculate_cover_dimensions",
    "calculate_inside_dimensions",
    "crop_center",
    "crop_rectangle",
    "encode_image",
    "icon_format_for_mimetype",
    "icon_owner_guid",
    "resolve_filestore_prefix",
    "scale_inside",
    "scale_to_cover",
]
