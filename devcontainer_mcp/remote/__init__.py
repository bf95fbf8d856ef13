"""Remote access to shells inside running containers."""

from devcontainer_mcp.remote.candidates import list_candidates, parse_names
from devcontainer_mcp.remote.registry import (
    RemoteMethodRegistry,
    UnknownMethodError,
    devcontainer_method,
    register_remote_method,
)
from devcontainer_mcp.remote.session import (
    command_argv,
    login_argv,
    parse_address,
    read_file,
    run_in_container,
)

__all__ = [
    "RemoteMethodRegistry",
    "UnknownMethodError",
    "command_argv",
    "devcontainer_method",
    "list_candidates",
    "login_argv",
    "parse_address",
    "parse_names",
    "read_file",
    "register_remote_method",
    "run_in_container",
]
