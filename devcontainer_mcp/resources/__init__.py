"""MCP resources for devcontainer MCP."""

from devcontainer_mcp.resources.containers import (
    container_file_resource,
    containers_list_resource,
    remote_methods_resource,
)
from devcontainer_mcp.resources.devcontainer import menu_resource, output_resource

__all__ = [
    "container_file_resource",
    "containers_list_resource",
    "menu_resource",
    "output_resource",
    "remote_methods_resource",
]
