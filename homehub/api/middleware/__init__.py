"""API middleware."""

from homehub.api.middleware.error_handler import ErrorHandlerMiddleware
from homehub.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
