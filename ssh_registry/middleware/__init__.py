"""ssh_registry MCP middleware components."""

from ssh_registry.middleware.errors import ErrorHandlingMiddleware
from ssh_registry.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
