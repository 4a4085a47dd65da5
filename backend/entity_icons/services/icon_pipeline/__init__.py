# backend/entity_icons/services/icon_pipeline/__init__.py
"""
Icon Pipeline Module

Derives fixed-size icon variants from a source image, stores them in the
filestore and looks them up again for serving.
"""

from .generators import IconVariantGenerator
from .icon_pipeline import IconPipeline, create_icon_pipeline
from .services import IconSizeResolver, IconSourceResolver, ResolvedIconSource
from .utils import (
    build_icon_filename,
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
    # Main pipeline
    "IconPipeline",
    "create_icon_pipeline",
    # Services
    "IconSizeResolver",
    "IconSourceResolver",
    "ResolvedIconSource",
    # Generators
    "IconVariantGenerator",
    # Utils
    "build_icon_filename",
    "crop_center",
    "crop_rectangle",
    "encode_image",
    "icon_format_for_mimetype",
    "icon_owner_guid",
    "resolve_filestore_prefix",
    "scale_inside",
    "scale_to_cover",
]
