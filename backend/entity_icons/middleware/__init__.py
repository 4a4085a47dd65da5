"""
Middleware package for Entity Icons.
"""

from .error_handler import ErrorHandlerMiddleware
from .request_logger import RequestLoggerMiddleware

__all__ = ["ErrorHandlerMiddleware", "RequestLoggerMiddleware"]
