# backend/entity_icons/routers/icon_routers.py
"""
Icon serving HTTP endpoints.

Icons are served from their deterministic filestore paths with a long-lived
public cache policy; the ETag changes whenever the icons are regenerated.
"""

from typing import Optional

from fastapi import APIRouter, Path as FastAPIPath, Query, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from ..constants import CACHE_CONTROL_PUBLIC, DEFAULT_SERVE_SIZE, PRAGMA_PUBLIC
from ..dependencies import IconPipelineDep, SettingsDep
from ..models.icon_generation_model import IconServingInfo
from ..utils.cache_helpers import validate_etag_match
from ..utils.router_helpers import handle_exceptions
from ..utils.time_utils import http_expires_in

router = APIRouter(tags=["icons"])


def _cache_headers(info: IconServingInfo, expires_seconds: int) -> dict:
    return {
        "ETag": info.etag,
        "Expires": http_expires_in(expires_seconds),
        "Cache-Control": CACHE_CONTROL_PUBLIC,
        "Pragma": PRAGMA_PUBLIC,
    }


def _parse_guid(raw_guid: Optional[str]) -> Optional[int]:
    try:
        guid = int(raw_guid)
    except (TypeError, ValueError):
        return None
    return guid if guid >= 1 else None


async def _serve_icon(
    request: Request,
    icon_pipeline: IconPipelineDep,
    settings: SettingsDep,
    raw_guid: Optional[str],
    size: Optional[str],
) -> Response:
    guid = _parse_guid(raw_guid)
    info = None
    if guid is not None:
        info = await run_in_threadpool(icon_pipeline.prepare_icon_for_serving, guid, size)

    # Unresolvable guids and absent icons end with no body
    if info is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    headers = _cache_headers(info, settings.icon_cache_expires_seconds)

    # Check If-None-Match header for 304 Not Modified
    if_none_match = request.headers.get("if-none-match")
    if if_none_match and validate_etag_match(if_none_match, info.etag):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)

    headers["Content-Length"] = str(len(info.contents))
    return Response(content=info.contents, media_type=info.mimetype, headers=headers)


@router.get("/icon")
@handle_exceptions("serve entity icon")
async def serve_icon(
    request: Request,
    icon_pipeline: IconPipelineDep,
    settings: SettingsDep,
    guid: Optional[str] = Query(None, description="Entity GUID"),
    size: str = Query(DEFAULT_SERVE_SIZE, description="Icon size name"),
):
    """Serve a stored icon variant (``?guid=&size=``)."""
    return await _serve_icon(request, icon_pipeline, settings, guid, size)


@router.get("/icons/{guid}/{size}")
@handle_exceptions("serve entity icon")
async def serve_icon_by_path(
    request: Request,
    icon_pipeline: IconPipelineDep,
    settings: SettingsDep,
    guid: str = FastAPIPath(..., description="Entity GUID"),
    size: str = FastAPIPath(..., description="Icon size name"),
):
    """Serve a stored icon variant addressed by path."""
    return await _serve_icon(request, icon_pipeline, settings, guid, size)
