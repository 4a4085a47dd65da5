# backend/entity_icons/routers/health_routers.py
"""
System health HTTP endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter

from .. import __version__
from ..dependencies import IconPipelineDep, SettingsDep
from ..utils.router_helpers import handle_exceptions
from ..utils.time_utils import utc_now

router = APIRouter(tags=["health"])


@router.get("/health", response_model=Dict[str, Any])
@handle_exceptions("basic health check")
async def health_check(
    settings: SettingsDep, icon_pipeline: IconPipelineDep
) -> Dict[str, Any]:
    """
    Quick health check endpoint for load balancers and monitoring.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.environment,
        "timestamp": utc_now().isoformat(),
        "icon_pipeline": icon_pipeline.get_pipeline_status(),
    }
