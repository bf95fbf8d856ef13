"""Data models for devcontainer MCP."""

from devcontainer_mcp.models.command import (
    ArgKind,
    ArgSpec,
    CommandDescriptor,
    CommandResult,
)
from devcontainer_mcp.models.process import (
    Notification,
    ProcessHandle,
    ProcessState,
    describe_returncode,
)
from devcontainer_mcp.models.remote import (
    HOST_PLACEHOLDER,
    LOGIN_PLACEHOLDER,
    OWN_REMOTE_PATH,
    RemoteAddress,
    RemoteMethod,
)

__all__ = [
    "ArgKind",
    "ArgSpec",
    "CommandDescriptor",
    "CommandResult",
    "HOST_PLACEHOLDER",
    "LOGIN_PLACEHOLDER",
    "Notification",
    "OWN_REMOTE_PATH",
    "ProcessHandle",
    "ProcessState",
    "RemoteAddress",
    "RemoteMethod",
    "describe_returncode",
]
