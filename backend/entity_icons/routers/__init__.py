# backend/entity_icons/routers/__init__.py
from .entity_routers import router as entity_router
from .health_routers import router as health_router
from .icon_routers import router as icon_router

__all__ = ["entity_router", "health_router", "icon_router"]
