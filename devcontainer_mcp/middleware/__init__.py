"""devcontainer MCP middleware components."""

from devcontainer_mcp.middleware.base import DevcontainerMiddleware
from devcontainer_mcp.middleware.errors import ErrorHandlingMiddleware
from devcontainer_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "DevcontainerMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
