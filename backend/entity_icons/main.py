# backend/entity_icons/main.py
"""
FastAPI application entry point for Entity Icons.

This file should ONLY handle HTTP wiring: logging setup, middleware and
routers. Icon work happens in the icon pipeline service.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .enums import LogEmoji, LoggerName, LogSource
from .middleware import ErrorHandlerMiddleware, RequestLoggerMiddleware
from .routers import entity_router, health_router, icon_router
from .services.logger import get_service_logger, setup_logging

logger = get_service_logger(LoggerName.SYSTEM, LogSource.SYSTEM)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle application startup and shutdown"""
    settings.ensure_directories()
    log_file = settings.log_file
    if log_file and not Path(log_file).is_absolute():
        log_file = str(Path(settings.logs_directory) / log_file)
    setup_logging(level=settings.log_level, log_file=log_file)

    # Startup
    logger.info(
        "Starting FastAPI application",
        emoji=LogEmoji.STARTUP,
        extra_context={
            "operation": "application_startup",
            "environment": settings.environment,
            "api_host": settings.api_host,
            "api_port": settings.api_port,
            "filestore": settings.filestore_directory,
        },
    )

    yield

    # Shutdown
    logger.info(
        "Shutting down FastAPI application",
        emoji=LogEmoji.SHUTDOWN,
        extra_context={
            "operation": "application_shutdown",
            "environment": settings.environment,
        },
    )


app = FastAPI(
    title="Entity Icons API",
    description="Icon generation and serving for CMS entities",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware stack (order matters: last added = first executed)
# 1. Error handling (outermost - catches all errors)
app.add_middleware(ErrorHandlerMiddleware)

# 2. Request logging (logs all requests with correlation IDs)
app.add_middleware(RequestLoggerMiddleware)

# 3. CORS middleware (innermost - handles CORS before business logic)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(icon_router)
app.include_router(entity_router)
app.include_router(health_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Entity Icons API", "version": __version__, "docs": "/docs"}


if __name__ == "__main__":
    uvicorn.run(
        "entity_icons.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.value.lower(),
    )
