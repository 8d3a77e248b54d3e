"""API middleware."""

from reorder.api.middleware.error_handler import ErrorHandlerMiddleware
from reorder.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
