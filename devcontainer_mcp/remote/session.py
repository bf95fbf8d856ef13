"""Shell sessions inside containers through a registered remote method."""

import asyncio
import logging
import re
import shlex

from devcontainer_mcp.models import (
    HOST_PLACEHOLDER,
    LOGIN_PLACEHOLDER,
    OWN_REMOTE_PATH,
    CommandResult,
    RemoteAddress,
    RemoteMethod,
)
from devcontainer_mcp.utils.validation import validate_container, validate_path

logger = logging.getLogger(__name__)

HOME_PATTERN = re.compile(r"^~[a-zA-Z0-9_.-]*$")


def parse_address(address: str) -> RemoteAddress:
    """Parse a "/method:container:/path" remote address.

    The leading slash is optional, and so is the path (defaults to "/").
    The path may itself contain colons.

    Raises:
        ValueError: If method or container is missing or invalid.
    """
    address = address.strip()
    body = address[1:] if address.startswith("/") else address

    parts = body.split(":", 2)
    if len(parts) < 2 or not parts[0]:
        raise ValueError(
            f"Invalid remote address '{address}'. Expected '/method:container:/path'"
        )

    method = parts[0]
    container = validate_container(parts[1])
    path = parts[2] if len(parts) == 3 and parts[2] else "/"
    return RemoteAddress(method=method, container=container, path=validate_path(path))


def login_argv(method: RemoteMethod, container: str) -> list[str]:
    """Expand the method's login template for a container.

    HOST_PLACEHOLDER becomes the container id. LOGIN_PLACEHOLDER becomes the
    remote shell followed by its login flags.
    """
    argv = [method.login_program]
    for arg in method.login_args:
        if arg == HOST_PLACEHOLDER:
            argv.append(container)
        elif arg == LOGIN_PLACEHOLDER:
            argv.extend([method.remote_shell, *method.remote_shell_login])
        else:
            argv.append(arg)
    return argv


def _shell_path(path: str) -> str:
    """Quote a path for the remote shell, leaving a leading ~ to expand."""
    if not path.startswith("~"):
        return shlex.quote(path)
    home, _, rest = path.partition("/")
    if not HOME_PATTERN.match(home):
        raise ValueError(f"Invalid home reference: {home!r}")
    return f"{home}/{shlex.quote(rest)}" if rest else home


def path_export(remote_path: list[str]) -> str:
    """Shell snippet exporting PATH built from the remote path list."""
    entries = ["$PATH" if p == OWN_REMOTE_PATH else shlex.quote(p) for p in remote_path]
    return f"PATH={':'.join(entries)}; export PATH"


def command_argv(
    method: RemoteMethod,
    container: str,
    command: str,
    remote_path: list[str] | None = None,
    cwd: str | None = None,
) -> list[str]:
    """Login argv plus the shell's command flags and the command itself.

    With cwd the command runs from that directory and is skipped when the
    cd fails.
    """
    script = command
    if cwd:
        script = f"cd {_shell_path(cwd)} && {script}"
    if remote_path:
        script = f"{path_export(remote_path)}; {script}"
    return [*login_argv(method, container), *method.remote_shell_args, script]


async def run_in_container(
    method: RemoteMethod,
    container: str,
    command: str,
    remote_path: list[str] | None = None,
    timeout: float | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Run a shell command inside a container and capture its output.

    Raises:
        ValueError: If the container name or cwd is invalid.
        OSError: If the login program cannot be started.
        TimeoutError: If the command outlives timeout (it is killed).
    """
    container = validate_container(container)
    if cwd is not None:
        cwd = validate_path(cwd)
    argv = command_argv(method, container, command, remote_path, cwd)
    logger.debug("Running in %s: %s", container, command)

    process = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise TimeoutError(
            f"Command in {container} timed out after {timeout}s: {command}"
        ) from None

    return CommandResult(
        output=stdout.decode("utf-8", errors="replace"),
        error=stderr.decode("utf-8", errors="replace"),
        returncode=process.returncode if process.returncode is not None else 0,
    )


async def read_file(
    method: RemoteMethod,
    container: str,
    path: str,
    remote_path: list[str] | None = None,
    timeout: float | None = None,
) -> str:
    """Read a file inside a container.

    Raises:
        FileNotFoundError: If cat fails (missing file, directory, no permission).
    """
    path = validate_path(path)
    target = _shell_path(path)
    result = await run_in_container(
        method, container, f"cat {target}", remote_path, timeout
    )
    if result.returncode != 0:
        message = result.error.strip() or f"cat exited with {result.returncode}"
        raise FileNotFoundError(f"{container}:{path}: {message}")
    return result.output
