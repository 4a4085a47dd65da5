# backend/entity_icons/routers/entity_routers.py
"""
Entity and icon management HTTP endpoints.

Uploads are staged in the uploads directory, handed to the icon pipeline
as a local source and removed once generation finishes.
"""

import shutil
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import (
    APIRouter,
    File,
    Form,
    HTTPException,
    Path as FastAPIPath,
    Response,
    UploadFile,
    status,
)
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from ..constants import CROP_COORDINATE_ATTRIBUTES
from ..dependencies import EntityOperationsDep, IconPipelineDep, SettingsDep
from ..enums import IconGenerationStatus, LogEmoji, LoggerName, LogSource
from ..models.crop_model import CropRectangle
from ..models.icon_generation_model import IconGenerationConfig
from ..models.shared_models import (
    EntityCreate,
    EntityResponse,
    IconSizeResponse,
    IconUploadResponse,
)
from ..services.logger import get_service_logger
from ..utils.router_helpers import handle_exceptions, validate_entity_exists

logger = get_service_logger(LoggerName.API, LogSource.API)

router = APIRouter(tags=["entities"])

_UPLOAD_STATUS_CODES = {
    IconGenerationStatus.SUCCESS: status.HTTP_200_OK,
    IconGenerationStatus.PARTIAL_FAILURE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    IconGenerationStatus.FATAL: status.HTTP_400_BAD_REQUEST,
}


def _entity_response(entity) -> EntityResponse:
    return EntityResponse(
        guid=entity.guid,
        type=entity.type,
        subtype=entity.subtype,
        owner_guid=entity.owner_guid,
        mimetype=entity.mimetype,
        enabled=entity.enabled,
        icontime=entity.icontime,
        attributes=dict(entity.attributes),
    )


def _parse_crop(
    x1: Optional[int], y1: Optional[int], x2: Optional[int], y2: Optional[int]
) -> Optional[CropRectangle]:
    values = dict(zip(CROP_COORDINATE_ATTRIBUTES, (x1, y1, x2, y2)))
    provided = [name for name, value in values.items() if value is not None]
    if not provided:
        return None
    if len(provided) != len(values):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Crop requires all of x1, y1, x2, y2",
        )
    try:
        return CropRectangle(**values)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid crop: {e}"
        )


def _stage_upload(upload: UploadFile, uploads_directory: str) -> Path:
    staging_dir = Path(uploads_directory)
    staging_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename or "").suffix.lower()
    staged = staging_dir / f"{uuid.uuid4().hex}{suffix}"
    with staged.open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return staged


@router.post(
    "/entities", response_model=EntityResponse, status_code=status.HTTP_201_CREATED
)
@handle_exceptions("create entity")
async def create_entity(
    entity_data: EntityCreate, entity_ops: EntityOperationsDep
) -> EntityResponse:
    """Register a new entity."""
    entity = entity_ops.create_entity(
        entity_type=entity_data.type,
        subtype=entity_data.subtype,
        owner_guid=entity_data.owner_guid,
        mimetype=entity_data.mimetype,
        enabled=entity_data.enabled,
    )
    return _entity_response(entity)


@router.get("/entities/{guid}", response_model=EntityResponse)
@handle_exceptions("fetch entity")
async def get_entity(
    entity_ops: EntityOperationsDep,
    guid: int = FastAPIPath(..., description="Entity GUID", ge=1),
) -> EntityResponse:
    """Entity summary including icon attributes."""
    return _entity_response(validate_entity_exists(entity_ops, guid))


@router.get("/entities/{guid}/icon-sizes", response_model=IconSizeResponse)
@handle_exceptions("resolve icon sizes")
async def get_entity_icon_sizes(
    entity_ops: EntityOperationsDep,
    icon_pipeline: IconPipelineDep,
    guid: int = FastAPIPath(..., description="Entity GUID", ge=1),
) -> IconSizeResponse:
    """Resolved icon size table for an entity (after plugin hooks)."""
    entity = validate_entity_exists(entity_ops, guid)
    return IconSizeResponse(guid=guid, sizes=icon_pipeline.get_icon_sizes(entity))


@router.post("/entities/{guid}/icon", response_model=IconUploadResponse)
@handle_exceptions("upload entity icon")
async def upload_entity_icon(
    response: Response,
    entity_ops: EntityOperationsDep,
    icon_pipeline: IconPipelineDep,
    settings: SettingsDep,
    guid: int = FastAPIPath(..., description="Entity GUID", ge=1),
    file: UploadFile = File(..., description="Source image"),
    x1: Optional[int] = Form(None),
    y1: Optional[int] = Form(None),
    x2: Optional[int] = Form(None),
    y2: Optional[int] = Form(None),
) -> IconUploadResponse:
    """
    Upload a source image and generate every icon variant for the entity.

    Responds 200 on success, 422 when some variants failed (the entity is
    left unchanged) and 400 when nothing could be generated.
    """
    entity = validate_entity_exists(entity_ops, guid)
    config = IconGenerationConfig(coords=_parse_crop(x1, y1, x2, y2))

    staged = await run_in_threadpool(_stage_upload, file, settings.uploads_directory)
    try:
        result = await run_in_threadpool(icon_pipeline.make_icons, entity, staged, config)
    finally:
        staged.unlink(missing_ok=True)

    response.status_code = _UPLOAD_STATUS_CODES[result.status]
    logger.info(
        f"Icon upload for entity {guid}: {result.status.value}",
        emoji=LogEmoji.SUCCESS if result.success else LogEmoji.FAILED,
        extra_context={"upload_filename": file.filename},
    )
    return IconUploadResponse(guid=guid, icontime=entity.icontime, result=result)


@router.delete("/entities/{guid}/icon", response_model=List[str])
@handle_exceptions("delete entity icon")
async def delete_entity_icon(
    entity_ops: EntityOperationsDep,
    icon_pipeline: IconPipelineDep,
    guid: int = FastAPIPath(..., description="Entity GUID", ge=1),
) -> List[str]:
    """Remove every stored icon variant; returns the removed filenames."""
    entity = validate_entity_exists(entity_ops, guid)
    return await run_in_threadpool(icon_pipeline.delete_icons, entity)
