# backend/entity_icons/utils/router_helpers.py
"""
Router Helper Functions

Common functions and decorators for FastAPI routers to reduce code duplication.
Provides standardized error handling and entity validation.
"""

from functools import wraps
from typing import Callable

from fastapi import HTTPException, status

from ..database.entity_operations import EntityOperations
from ..enums import LoggerName, LogSource
from ..exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidAttributeError,
)
from ..models.entity_model import Entity
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.API, LogSource.API)


def handle_exceptions(operation_name: str):
    """
    Decorator for standardized exception handling in router endpoints.

    Args:
        operation_name: Human-readable description of the operation for error messages

    Usage:
        @handle_exceptions("serve entity icon")
        async def serve_icon():
            # endpoint logic here
            pass
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTP exceptions as-is
                raise
            except EntityNotFoundError as e:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
            except (InvalidAttributeError, ConfigurationError) as e:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
            except Exception as e:
                logger.error(f"Error {operation_name}", exception=e)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation_name}",
                )

        return wrapper

    return decorator


def validate_entity_exists(entity_ops: EntityOperations, guid: int) -> Entity:
    """
    Load a visible entity or fail the request.

    Raises:
        HTTPException: 404 if the entity is missing or hidden
    """
    entity = entity_ops.get_entity(guid)
    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Entity {guid} not found"
        )
    return entity
