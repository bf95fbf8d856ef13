"""MCP tools for devcontainer MCP."""

from devcontainer_mcp.tools.containers import container_exec, list_containers
from devcontainer_mcp.tools.devcontainer import (
    devcontainer,
    devcontainer_commands,
    devcontainer_status,
)

__all__ = [
    "container_exec",
    "devcontainer",
    "devcontainer_commands",
    "devcontainer_status",
    "list_containers",
]
