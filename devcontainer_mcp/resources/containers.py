"""Container resources: running containers, files inside them, remote methods."""

from fastmcp.exceptions import ResourceError

from devcontainer_mcp.models import HOST_PLACEHOLDER, LOGIN_PLACEHOLDER, RemoteAddress
from devcontainer_mcp.remote import UnknownMethodError, login_argv, read_file
from devcontainer_mcp.services.state import get_context


async def containers_list_resource() -> str:
    """List running containers with their remote addresses.

    Returns:
        Formatted container list.
    """
    context = get_context()
    method_name = context.config.remote_method

    try:
        names = await context.remote_methods.candidates(method_name)
    except UnknownMethodError as e:
        raise ResourceError(str(e)) from e

    if not names:
        return (
            "# Running Containers\n\n"
            "No containers found (or container runtime not available)."
        )

    lines = ["# Running Containers", "=" * 50, ""]
    for name in names:
        lines.append(f"● {name}")
        lines.append(f"    Address: {RemoteAddress(method_name, name)}")
        lines.append(f"    Files:   devcontainer://{name}/etc/os-release")
        lines.append("")

    return "\n".join(lines)


async def container_file_resource(container: str, path: str) -> str:
    """Read a file inside a running container.

    Args:
        container: Container name or id
        path: Path inside the container (relative to /)

    Raises:
        ResourceError: If the method is missing, the container name is
            invalid, the login program cannot run, or the file cannot be read.
    """
    context = get_context()

    try:
        method = context.remote_methods.get(context.config.remote_method)
    except UnknownMethodError as e:
        raise ResourceError(str(e)) from e

    try:
        return await read_file(
            method,
            container,
            path,
            remote_path=context.remote_methods.remote_path,
            timeout=context.config.command_timeout,
        )
    except FileNotFoundError as e:
        raise ResourceError(f"Cannot read {path} in {container}: {e}") from e
    except (ValueError, OSError) as e:
        raise ResourceError(f"Cannot reach container {container}: {e}") from e


async def remote_methods_resource() -> str:
    """Registered remote methods and their login commands."""
    context = get_context()
    registry = context.remote_methods

    if not len(registry):
        return "No remote methods registered."

    lines = ["Remote Methods", "=" * 40, ""]
    for method in registry.methods:
        example = " ".join(login_argv(method, HOST_PLACEHOLDER))
        template = " ".join(method.login_args)
        lines.append(f"{method.name}")
        lines.append(f"    Login:    {method.login_program} {template}")
        lines.append(f"    Expands:  {example}")
        lines.append(f"    Shell:    {method.remote_shell} {' '.join(method.remote_shell_login)}")
        lines.append(f"    Address:  /{method.name}:<container>:/path")
        lines.append("")

    lines.append("Remote PATH: " + ":".join(registry.remote_path))
    lines.append(f"({LOGIN_PLACEHOLDER} expands to the remote shell with login flags)")
    return "\n".join(lines)
