# backend/entity_icons/models/icon_size_model.py
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..constants import CROPPABLE_SIZE_NAMES
from ..exceptions import ConfigurationError


class IconSizeSpec(BaseModel):
    """One named icon variant definition."""

    width: int = Field(
        ..., gt=0, validation_alias=AliasChoices("width", "w"), description="Target width"
    )
    height: int = Field(
        ..., gt=0, validation_alias=AliasChoices("height", "h"), description="Target height"
    )
    croppable: bool = Field(
        default=False,
        validation_alias=AliasChoices("croppable", "square"),
        description="Cover-crop to the exact target instead of fitting inside it",
    )
    upscale: bool = Field(
        default=False, description="Whether sources smaller than the target may be enlarged"
    )
    metadata_field: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("metadata_field", "metadata_name"),
        description="Entity attribute that receives the stored filename",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    def is_croppable(self, size_name: str) -> bool:
        """True if this variant is cover-cropped, by name or by its own flag."""
        return size_name in CROPPABLE_SIZE_NAMES or self.croppable

    @property
    def dimensions(self):
        return (self.width, self.height)


IconSizeMap = Dict[str, IconSizeSpec]


def coerce_icon_sizes(sizes: Mapping[str, Any]) -> IconSizeMap:
    """
    Validate a raw size table into ``IconSizeSpec`` instances.

    Values may already be ``IconSizeSpec`` objects or plain dictionaries
    (``w``/``h``/``square``/``metadata_name`` keys are accepted).

    Raises:
        ConfigurationError: if any entry is not a valid size definition
    """
    coerced: IconSizeMap = {}
    for name, spec in sizes.items():
        if isinstance(spec, IconSizeSpec):
            coerced[str(name)] = spec
            continue
        try:
            coerced[str(name)] = IconSizeSpec.model_validate(spec)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid icon size '{name}': {e}") from e
    return coerced
