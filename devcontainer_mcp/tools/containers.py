"""Tools for reaching running containers through the remote method."""

import logging

from devcontainer_mcp.remote import UnknownMethodError, parse_address, run_in_container
from devcontainer_mcp.services.state import get_context

logger = logging.getLogger(__name__)


async def list_containers() -> str:
    """List running containers that can be used with container_exec.

    Returns:
        One container name per line, or a note when none are running.
    """
    context = get_context()
    try:
        names = await context.remote_methods.candidates(context.config.remote_method)
    except UnknownMethodError as e:
        return f"Error: {e}"

    if not names:
        return "No running containers found (or container runtime not available)."
    return "\n".join(names)


async def container_exec(
    container: str,
    command: str,
    timeout: int | None = None,
) -> str:
    """Run a shell command inside a running container.

    Uses `devcontainer exec --container-id <container>` with a POSIX login
    shell, so the container's login PATH applies. A remote address of the
    form "/method:container:/path" picks the registered method by name and
    runs the command from that path.

    Args:
        container: Container name or id (see list_containers), or a
            remote address as listed by containers://list.
        command: Shell command line to run.
        timeout: Seconds before the command is killed (default from config).

    Examples:
        container_exec("app_devcontainer-app-1", "uname -a")
        container_exec("app_devcontainer-app-1", "ls /workspaces", timeout=5)
        container_exec("/devcontainer:app_devcontainer-app-1:/workspaces", "ls")

    Returns:
        Command output, stderr and a non-zero exit code when present.
    """
    context = get_context()
    method_name = context.config.remote_method
    cwd = None

    if ":" in container:
        try:
            address = parse_address(container)
        except ValueError as e:
            return f"Error: {e}"
        method_name, container, cwd = address.method, address.container, address.path

    try:
        method = context.remote_methods.get(method_name)
    except UnknownMethodError as e:
        return f"Error: {e}"

    try:
        result = await run_in_container(
            method,
            container,
            command,
            remote_path=context.remote_methods.remote_path,
            timeout=timeout or context.config.command_timeout,
            cwd=cwd,
        )
    except (ValueError, OSError, TimeoutError) as e:
        return f"Error: Command failed: {e}"

    output_parts = []
    if result.output:
        output_parts.append(result.output)
    if result.error:
        output_parts.append(f"[stderr]\n{result.error}")
    if result.returncode != 0:
        output_parts.append(f"[exit code: {result.returncode}]")

    return "\n".join(output_parts) if output_parts else "(no output)"
