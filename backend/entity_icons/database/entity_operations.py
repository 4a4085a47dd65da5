# backend/entity_icons/database/entity_operations.py
"""
Entity store operations.

In-process entity registry standing in for the CMS entity store. Lookups
honour the access gate: disabled entities are only visible while hidden
visibility is elevated.
"""

from itertools import count
from typing import Any, Dict, List, Optional

from ..enums import EntityType, LogEmoji, LoggerName, LogSource
from ..exceptions import EntityNotFoundError
from ..models.entity_model import Entity, FileEntity
from ..services.access_service import AccessGate
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.ENTITY_SERVICE, LogSource.STORAGE)


class EntityOperations:
    """Entity CRUD backed by an in-memory identity map."""

    def __init__(self, access_gate: AccessGate):
        self.access_gate = access_gate
        self._entities: Dict[int, Entity] = {}
        self._guids = count(1)

    def _next_guid(self) -> int:
        guid = next(self._guids)
        while guid in self._entities:
            guid = next(self._guids)
        return guid

    def create_entity(
        self,
        entity_type: EntityType,
        subtype: Optional[str] = None,
        owner_guid: int = 0,
        mimetype: Optional[str] = None,
        enabled: bool = True,
        filename: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> Entity:
        """
        Create and register a new entity.

        A ``filename`` makes the entity file-backed (``FileEntity``).
        """
        fields = dict(
            guid=self._next_guid(),
            type=entity_type,
            subtype=subtype,
            owner_guid=owner_guid,
            mimetype=mimetype,
            enabled=enabled,
        )
        if filename:
            entity: Entity = FileEntity(filename=filename, **fields)
        else:
            entity = Entity(**fields)

        if attributes:
            entity.set_attributes(attributes)

        self._entities[entity.guid] = entity
        logger.info(
            f"Created {entity.type.value} entity {entity.guid}",
            emoji=LogEmoji.CREATE,
            extra_context={"subtype": subtype, "owner_guid": owner_guid},
        )
        return entity

    def add_entity(self, entity: Entity) -> Entity:
        """Register an entity that already carries its GUID."""
        self._entities[entity.guid] = entity
        return entity

    def get_entity(self, guid: int) -> Optional[Entity]:
        """Return a visible entity or None."""
        entity = self._entities.get(guid)
        if entity is None:
            return None
        if not entity.enabled and not self.access_gate.get_hidden_visibility():
            return None
        return entity

    def get_entity_or_raise(self, guid: int) -> Entity:
        entity = self.get_entity(guid)
        if entity is None:
            raise EntityNotFoundError(f"Entity {guid} not found")
        return entity

    def save_entity(self, entity: Entity) -> Entity:
        self._entities[entity.guid] = entity
        return entity

    def delete_entity(self, guid: int) -> bool:
        return self._entities.pop(guid, None) is not None

    def list_entities(self) -> List[Entity]:
        show_hidden = self.access_gate.get_hidden_visibility()
        return [
            entity
            for entity in self._entities.values()
            if entity.enabled or show_hidden
        ]
