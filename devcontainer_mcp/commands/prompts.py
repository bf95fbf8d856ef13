"""Interactive argument collection for devcontainer subcommands.

Each interactive ArgSpec is answered by a Prompter before anything is spawned:

- ConsolePrompter reads from the terminal (used by the console menu)
- ElicitPrompter asks the MCP client through FastMCP elicitation
- SuppliedValuePrompter answers from values passed as tool arguments
"""

import asyncio
import logging
import shlex
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from mcp.shared.exceptions import McpError

from devcontainer_mcp.models import ArgKind, ArgSpec, CommandDescriptor
from devcontainer_mcp.protocols import Prompter

if TYPE_CHECKING:
    from fastmcp import Context

logger = logging.getLogger(__name__)


class PromptError(ValueError):
    """A prompted value is missing or invalid."""


class PromptCancelled(PromptError):
    """The user dismissed a prompt."""


class ConsolePrompter:
    """Prompt on the terminal.

    input() runs in a worker thread so running processes keep streaming
    output while the user types.
    """

    def __init__(self, input_func: Callable[[str], str] = input) -> None:
        self._input = input_func

    async def _ask(self, prompt: str) -> str:
        try:
            return await asyncio.to_thread(self._input, prompt)
        except (EOFError, KeyboardInterrupt) as e:
            raise PromptCancelled(f"Prompt cancelled: {prompt.strip()}") from e

    async def read_text(self, spec: ArgSpec) -> str:
        return await self._ask(spec.prompt)

    async def read_shell_command(self, spec: ArgSpec) -> str:
        return await self._ask(spec.prompt)

    async def read_file_name(self, spec: ArgSpec) -> str:
        return await self._ask(spec.prompt)


class ElicitPrompter:
    """Prompt the MCP client through elicitation."""

    def __init__(self, ctx: "Context") -> None:
        self.ctx = ctx

    async def _ask(self, message: str) -> str:
        try:
            result = await self.ctx.elicit(message, response_type=str)
        except McpError as e:
            raise PromptError(f"Cannot prompt for '{message.strip()}': {e}") from e
        if result.action != "accept":
            raise PromptCancelled(f"Prompt not answered ({result.action}): {message.strip()}")
        return str(result.data)

    async def read_text(self, spec: ArgSpec) -> str:
        return await self._ask(spec.prompt)

    async def read_shell_command(self, spec: ArgSpec) -> str:
        return await self._ask(f"{spec.prompt.strip()} (shell command)")

    async def read_file_name(self, spec: ArgSpec) -> str:
        return await self._ask(f"{spec.prompt.strip()} (path)")


class SuppliedValuePrompter:
    """Answer prompts from pre-supplied values keyed by argument name.

    Missing values are delegated to the fallback prompter when one is set.
    """

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        fallback: Prompter | None = None,
    ) -> None:
        self.values = dict(values or {})
        self.fallback = fallback

    def _lookup(self, spec: ArgSpec) -> str | None:
        value = self.values.get(spec.name)
        return None if value is None else str(value)

    def _missing(self, spec: ArgSpec) -> PromptError:
        return PromptError(f"Missing value for '{spec.name}' ({spec.prompt.strip()})")

    async def read_text(self, spec: ArgSpec) -> str:
        value = self._lookup(spec)
        if value is not None:
            return value
        if self.fallback is None:
            raise self._missing(spec)
        return await self.fallback.read_text(spec)

    async def read_shell_command(self, spec: ArgSpec) -> str:
        value = self._lookup(spec)
        if value is not None:
            return value
        if self.fallback is None:
            raise self._missing(spec)
        return await self.fallback.read_shell_command(spec)

    async def read_file_name(self, spec: ArgSpec) -> str:
        value = self._lookup(spec)
        if value is not None:
            return value
        if self.fallback is None:
            raise self._missing(spec)
        return await self.fallback.read_file_name(spec)


def _resolve_file(spec: ArgSpec, raw: str, base_dir: Path | None) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    if spec.must_exist and not path.exists():
        raise PromptError(f"No such file or directory: {path}")
    return str(path)


async def gather_args(
    descriptor: CommandDescriptor,
    prompter: Prompter,
    base_dir: Path | None = None,
) -> list[str]:
    """Build the subcommand-specific argument list.

    Literal values are taken as-is. Interactive values are prompted in
    table order and validated.

    Args:
        descriptor: Command to collect arguments for
        prompter: Source of interactive values
        base_dir: Directory relative file paths are resolved against

    Returns:
        Ordered argument strings (flags included)

    Raises:
        PromptError: If a value is empty, unparsable or a required path is missing
        PromptCancelled: If the user dismissed a prompt
    """
    args: list[str] = []

    for spec in descriptor.args:
        if spec.kind is ArgKind.LITERAL:
            values = [spec.value]
        elif spec.kind is ArgKind.TEXT:
            text = (await prompter.read_text(spec)).strip()
            if not text:
                raise PromptError(f"'{spec.name}' cannot be empty")
            values = [text]
        elif spec.kind is ArgKind.SHELL:
            command = await prompter.read_shell_command(spec)
            try:
                values = shlex.split(command)
            except ValueError as e:
                raise PromptError(f"Cannot parse command {command!r}: {e}") from e
            if not values:
                raise PromptError(f"'{spec.name}' cannot be empty")
        else:
            raw = (await prompter.read_file_name(spec)).strip()
            if not raw:
                raise PromptError(f"'{spec.name}' cannot be empty")
            values = [_resolve_file(spec, raw, base_dir)]

        if spec.flag:
            args.append(spec.flag)
        args.extend(values)

    logger.debug("Collected args for %s: %s", descriptor.name, args)
    return args
