# backend/entity_icons/dependencies/type_annotations.py
"""
Type annotations for FastAPI dependency injection.
"""

from typing import Annotated

from fastapi import Depends

from ..config import Settings
from ..database.entity_operations import EntityOperations
from ..services.access_service import AccessGate
from ..services.filestore_service import Filestore
from ..services.hook_service import HookRegistry
from ..services.icon_pipeline import IconPipeline
from .services import (
    get_access_gate,
    get_entity_operations,
    get_filestore,
    get_hook_registry,
    get_icon_pipeline,
    get_settings,
)

SettingsDep = Annotated[Settings, Depends(get_settings)]
AccessGateDep = Annotated[AccessGate, Depends(get_access_gate)]
HookRegistryDep = Annotated[HookRegistry, Depends(get_hook_registry)]
FilestoreDep = Annotated[Filestore, Depends(get_filestore)]
EntityOperationsDep = Annotated[EntityOperations, Depends(get_entity_operations)]
IconPipelineDep = Annotated[IconPipeline, Depends(get_icon_pipeline)]
