"""Services for devcontainer MCP."""

from devcontainer_mcp.services.dispatcher import Dispatcher, build_argv
from devcontainer_mcp.services.notify import NotificationLog
from devcontainer_mcp.services.output import DEFAULT_BUFFER_NAME, OutputBuffer
from devcontainer_mcp.services.workspace import (
    NoProjectError,
    find_project_root,
    resolve_workspace,
)

__all__ = [
    "DEFAULT_BUFFER_NAME",
    "Dispatcher",
    "NoProjectError",
    "NotificationLog",
    "OutputBuffer",
    "build_argv",
    "find_project_root",
    "resolve_workspace",
]
