# backend/entity_icons/models/shared_models.py
"""
Request and response models for the HTTP layer.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import EntityType
from .icon_generation_model import IconGenerationResult
from .icon_size_model import IconSizeSpec


class EntityCreate(BaseModel):
    """Model for registering a new entity"""

    type: EntityType = Field(..., description="Top-level entity kind")
    subtype: Optional[str] = Field(None, max_length=50, description="Entity subtype")
    owner_guid: int = Field(default=0, ge=0, description="GUID of the owning entity")
    mimetype: Optional[str] = Field(None, max_length=100, description="Entity mimetype")
    enabled: bool = Field(default=True, description="Whether the entity is visible")


class EntityResponse(BaseModel):
    """Entity summary including icon attributes"""

    guid: int
    type: EntityType
    subtype: Optional[str] = None
    owner_guid: int
    mimetype: Optional[str] = None
    enabled: bool
    icontime: int = 0
    attributes: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(from_attributes=True)


class IconSizeResponse(BaseModel):
    """Resolved icon size table for an entity"""

    guid: int
    sizes: Dict[str, IconSizeSpec]


class IconUploadResponse(BaseModel):
    """Response model for icon upload"""

    guid: int
    icontime: int
    result: IconGenerationResult
