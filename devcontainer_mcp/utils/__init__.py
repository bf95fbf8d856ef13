"""Utility modules for devcontainer MCP."""

from devcontainer_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from devcontainer_mcp.utils.validation import validate_container, validate_path

__all__ = [
    "ColorfulFormatter",
    "MCPRequestFormatter",
    "validate_container",
    "validate_path",
]
