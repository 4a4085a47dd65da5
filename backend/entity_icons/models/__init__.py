# backend/entity_icons/models/__init__.py
from .crop_model import CropRectangle
from .entity_model import Entity, FileEntity
from .icon_generation_model import (
    IconGenerationConfig,
    IconGenerationResult,
    IconServingInfo,
    IconVariantResult,
)
from .icon_size_model import IconSizeMap, IconSizeSpec, coerce_icon_sizes
from .shared_models import (
    EntityCreate,
    EntityResponse,
    IconSizeResponse,
    IconUploadResponse,
)

__all__ = [
    "CropRectangle",
    "Entity",
    "FileEntity",
    "IconGenerationConfig",
    "IconGenerationResult",
    "IconServingInfo",
    "IconVariantResult",
    "IconSizeMap",
    "IconSizeSpec",
    "coerce_icon_sizes",
    "EntityCreate",
    "EntityResponse",
    "IconSizeResponse",
    "IconUploadResponse",
]
