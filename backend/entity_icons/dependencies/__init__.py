# backend/entity_icons/dependencies/__init__.py
"""
Dependency injection for Entity Icons.

Singleton services live in a ServiceRegistry; routers consume them through
the ``*Dep`` Annotated aliases.
"""

from .services import (
    get_access_gate,
    get_entity_operations,
    get_filestore,
    get_hook_registry,
    get_icon_pipeline,
    get_settings,
)
from .type_annotations import (
    AccessGateDep,
    EntityOperationsDep,
    FilestoreDep,
    HookRegistryDep,
    IconPipelineDep,
    SettingsDep,
)

__all__ = [
    "get_access_gate",
    "get_entity_operations",
    "get_filestore",
    "get_hook_registry",
    "get_icon_pipeline",
    "get_settings",
    "AccessGateDep",
    "EntityOperationsDep",
    "FilestoreDep",
    "HookRegistryDep",
    "IconPipelineDep",
    "SettingsDep",
]
