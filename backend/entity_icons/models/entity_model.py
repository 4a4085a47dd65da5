# backend/entity_icons/models/entity_model.py
"""
Entity models.

Entities come in two variants: a plain ``Entity`` and a file-backed
``FileEntity`` whose stored blob can serve as its own icon source. Callers
ask ``has_own_content()`` instead of checking the class.
"""

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..constants import (
    CORE_ENTITY_FIELDS,
    CROP_COORDINATE_ATTRIBUTES,
    ICONTIME_ATTRIBUTE,
)
from ..enums import EntityType
from ..exceptions import InvalidAttributeError

_ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_:]*$")


class Entity(BaseModel):
    """A persistent CMS entity with a validated attribute bag."""

    guid: int = Field(..., ge=1, description="Stable entity identifier")
    type: EntityType = Field(..., description="Top-level entity kind")
    subtype: Optional[str] = Field(None, description="Entity subtype")
    owner_guid: int = Field(default=0, ge=0, description="GUID of the owning entity")
    mimetype: Optional[str] = Field(None, description="Declared mimetype of the entity")
    enabled: bool = Field(default=True, description="Disabled entities are hidden")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    def has_own_content(self) -> bool:
        return False

    def content_address(self) -> Optional[Tuple[int, str]]:
        """(owner_guid, filename) of the entity's own stored blob, if any."""
        return None

    @property
    def is_user(self) -> bool:
        return self.type == EntityType.USER

    @property
    def is_group(self) -> bool:
        return self.type == EntityType.GROUP

    # ------------------------------------------------------------------
    # Attribute capability
    # ------------------------------------------------------------------

    @staticmethod
    def validate_attribute_name(name: str) -> str:
        """
        Check an attribute name before it is written.

        Raises:
            InvalidAttributeError: for empty or malformed names and core field names
        """
        if not isinstance(name, str) or not _ATTRIBUTE_NAME_PATTERN.match(name):
            raise InvalidAttributeError(f"Invalid attribute name: {name!r}")
        if name in CORE_ENTITY_FIELDS:
            raise InvalidAttributeError(f"Attribute name is reserved: {name!r}")
        return name

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[self.validate_attribute_name(name)] = value

    def set_attributes(self, values: Mapping[str, Any]) -> None:
        # Validate everything first so a bad key leaves the entity untouched
        for name in values:
            self.validate_attribute_name(name)
        self.attributes.update(values)

    def delete_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    @property
    def icontime(self) -> int:
        return int(self.attributes.get(ICONTIME_ATTRIBUTE) or 0)

    @property
    def crop_coordinates(self) -> Dict[str, int]:
        return {
            coord: int(self.attributes.get(coord) or 0)
            for coord in CROP_COORDINATE_ATTRIBUTES
        }


class FileEntity(Entity):
    """An entity backed by a blob in the filestore (owner_guid, filename)."""

    filename: str = Field(..., min_length=1, description="Filestore name of the blob")

    model_config = ConfigDict(extra="ignore")

    def has_own_content(self) -> bool:
        return True

    def content_address(self) -> Optional[Tuple[int, str]]:
        return (self.owner_guid, self.filename)
