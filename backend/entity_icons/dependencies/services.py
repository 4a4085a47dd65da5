# backend/entity_icons/dependencies/services.py
"""
Service dependencies using the singleton factory pattern.

The pipeline and the entity store share one AccessGate so that elevating
hidden visibility while serving is seen by entity lookups.
"""

from ..config import Settings, settings
from ..database.entity_operations import EntityOperations
from ..services.access_service import AccessGate
from ..services.filestore_service import Filestore
from ..services.hook_service import HookRegistry
from ..services.icon_pipeline import IconPipeline, create_icon_pipeline
from .registry import get_singleton_service, register_singleton_factory


def _create_filestore() -> Filestore:
    return Filestore(settings.filestore_directory)


def _create_entity_operations() -> EntityOperations:
    return EntityOperations(get_access_gate())


def _create_icon_pipeline() -> IconPipeline:
    """Factory for creating IconPipeline with the shared collaborators."""
    return create_icon_pipeline(
        settings=settings,
        filestore=get_filestore(),
        entity_ops=get_entity_operations(),
        access_gate=get_access_gate(),
        hooks=get_hook_registry(),
    )


register_singleton_factory("access_gate", AccessGate)
register_singleton_factory("hook_registry", HookRegistry)
register_singleton_factory("filestore", _create_filestore)
register_singleton_factory("entity_operations", _create_entity_operations)
register_singleton_factory("icon_pipeline", _create_icon_pipeline)


def get_settings() -> Settings:
    return settings


def get_access_gate() -> AccessGate:
    return get_singleton_service("access_gate")


def get_hook_registry() -> HookRegistry:
    return get_singleton_service("hook_registry")


def get_filestore() -> Filestore:
    return get_singleton_service("filestore")


def get_entity_operations() -> EntityOperations:
    return get_singleton_service("entity_operations")


def get_icon_pipeline() -> IconPipeline:
    """Get IconPipeline singleton wired to the shared entity store and gate."""
    return get_singleton_service("icon_pipeline")
