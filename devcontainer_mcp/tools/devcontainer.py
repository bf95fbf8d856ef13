"""Tools for running devcontainer CLI subcommands."""

import logging
from datetime import datetime

from fastmcp import Context

from devcontainer_mcp.commands import (
    ElicitPrompter,
    PromptError,
    SuppliedValuePrompter,
    UnknownCommandError,
)
from devcontainer_mcp.models import ArgKind
from devcontainer_mcp.services import NoProjectError
from devcontainer_mcp.services.state import get_context

logger = logging.getLogger(__name__)


async def devcontainer(
    command: str,
    workspace_folder: str = "",
    values: dict[str, str] | None = None,
    ctx: Context | None = None,
) -> str:
    """Run a devcontainer CLI subcommand in the background.

    The process is started and this tool returns immediately. Progress goes
    to the devcontainer://output resource; the final status is reported by
    devcontainer_status.

    Args:
        command: Subcommand, e.g. "up", "build", "exec", "features test",
            "templates apply". See devcontainer_commands for the full list.
        workspace_folder: A path inside the project. The project root is
            found by walking up to a .devcontainer folder or VCS root.
            Defaults to the server's working directory.
        values: Answers for the command's prompts keyed by argument name,
            e.g. {"command": "npm test"} for exec or
            {"template_id": "ghcr.io/devcontainers/templates/python"} for
            templates apply. Missing answers are asked from the client.

    Examples:
        devcontainer("up", "/src/app")
        devcontainer("exec", "/src/app", {"command": "make test"})
        devcontainer("templates publish", "/src/templates", {"target": "src"})

    Returns:
        Confirmation with the command line, or an error message.
    """
    context = get_context()

    try:
        descriptor = context.commands.get(command)
    except UnknownCommandError as e:
        return f"Error: {e}"

    fallback = ElicitPrompter(ctx) if ctx is not None else None
    prompter = SuppliedValuePrompter(values, fallback=fallback)

    try:
        handle = await context.dispatcher.run(
            descriptor, workspace_folder or None, prompter
        )
    except (NoProjectError, PromptError) as e:
        return f"Error: {e}"

    lines = [
        f"Started devcontainer {handle.subcommand} in {handle.workspace}",
        f"$ {handle.command_line}",
    ]
    if handle.pid is not None:
        lines.append(f"pid {handle.pid}; output in {handle.buffer_name}")
    else:
        lines.append(f"Process did not start; see {handle.buffer_name}")
    return "\n".join(lines)


async def devcontainer_commands() -> str:
    """List the devcontainer subcommands this server can run.

    Returns:
        One line per subcommand with its prompted arguments.
    """
    context = get_context()
    lines = ["Devcontainer commands", "=" * 40, ""]

    for descriptor in context.commands:
        lines.append(f"{descriptor.name:<30} {descriptor.help}")
        for spec in descriptor.interactive_args:
            detail = spec.kind.value
            if spec.kind is ArgKind.FILE and spec.must_exist:
                detail += ", must exist"
            lines.append(f"    values[{spec.name!r}]  ({detail}) {spec.prompt.strip()}")

    return "\n".join(lines)


async def devcontainer_status(lines: int = 20) -> str:
    """Show running devcontainer processes and recent notifications.

    Args:
        lines: Number of trailing output lines to include (0 for none).

    Returns:
        Running processes, recent success/failure notifications, and the
        tail of the shared output buffer.
    """
    context = get_context()
    now = datetime.now()
    out = ["Running", "-" * 40]

    running = context.dispatcher.running
    if not running:
        out.append("(none)")
    for handle in running:
        elapsed = (now - handle.started_at).total_seconds()
        out.append(
            f"{handle.subcommand}  pid {handle.pid}  {handle.workspace}  {elapsed:.0f}s"
        )

    out += ["", "Notifications", "-" * 40]
    recent = context.notifications.recent(10)
    if not recent:
        out.append("(none)")
    for note in recent:
        marker = "FAILED" if note.is_failure else "OK"
        out.append(f"[{note.created_at:%H:%M:%S}] {marker:<6} {note.message}")

    if lines > 0:
        out += ["", f"Output ({context.output.name})", "-" * 40]
        out.append(context.output.tail(lines) or "(empty)")

    return "\n".join(out)
