"""HTTP middleware."""
from edconsult.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
