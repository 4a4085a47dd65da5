"""
Entity store package for Entity Icons.

Usage:
    from entity_icons.database import EntityOperations
    from entity_icons.services.access_service import AccessGate

    entity_ops = EntityOperations(AccessGate())
    group = entity_ops.create_entity(EntityType.GROUP, owner_guid=1)
"""

from .entity_operations import EntityOperations

__all__ = ["EntityOperations"]
