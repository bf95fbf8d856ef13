"""Asynchronous dispatch of devcontainer subcommands.

invoke() spawns the devcontainer CLI and returns at once. A supervision task
streams merged stdout/stderr into the shared OutputBuffer and, when the
process exits, runs the single completion handler that notifies success or
failure. Launch failures take the same completion path as failed runs.
"""

import asyncio
import codecs
import logging
from collections.abc import Callable
from pathlib import Path

from devcontainer_mcp.commands.prompts import gather_args
from devcontainer_mcp.config import Config
from devcontainer_mcp.models import (
    CommandDescriptor,
    ProcessHandle,
    ProcessState,
    describe_returncode,
)
from devcontainer_mcp.protocols import Notifier, Prompter
from devcontainer_mcp.services.output import OutputBuffer
from devcontainer_mcp.services.workspace import resolve_workspace

logger = logging.getLogger(__name__)

READ_CHUNK = 4096


def build_argv(subcommand: str, workspace: Path | str, args: list[str]) -> list[str]:
    """Argument vector passed to the devcontainer binary.

    The workspace folder always comes first, then the subcommand path, then
    the subcommand-specific arguments.
    """
    return ["--workspace-folder", str(workspace), *subcommand.split(), *args]


class Dispatcher:
    """Launches devcontainer processes and reports how they end.

    There is no cancellation and no retry. Processes of the same subcommand
    on the same workspace are allowed to overlap.
    """

    def __init__(
        self,
        config: Config,
        output: OutputBuffer,
        notifier: Notifier,
        resolver: Callable[[Path | str | None], Path] = resolve_workspace,
    ) -> None:
        self.config = config
        self.output = output
        self.notifier = notifier
        self.resolver = resolver
        self._live: list[ProcessHandle] = []

    @property
    def running(self) -> list[ProcessHandle]:
        return list(self._live)

    async def run(
        self,
        descriptor: CommandDescriptor,
        working_directory: Path | str | None,
        prompter: Prompter,
    ) -> ProcessHandle:
        """Resolve the workspace, prompt for arguments, then invoke.

        The workspace is resolved before prompting so a missing project
        fails without asking the user anything.

        Raises:
            NoProjectError: If no project root can be resolved.
            PromptError: If an argument prompt fails or is cancelled.
        """
        resolver = descriptor.resolve_workspace or self.resolver
        workspace = resolver(working_directory)
        args = await gather_args(descriptor, prompter, base_dir=workspace)
        return await self.invoke(descriptor.name, workspace, args, resolver=resolver)

    async def invoke(
        self,
        subcommand: str,
        working_directory: Path | str | None,
        args: list[str] | None = None,
        resolver: Callable[[Path | str | None], Path] | None = None,
    ) -> ProcessHandle:
        """Spawn `devcontainer --workspace-folder <dir> <subcommand> <args>`.

        Returns once the process has been started (or failed to start). The
        completion handler runs later on the event loop.

        Args:
            subcommand: Subcommand path, e.g. "up" or "features test"
            working_directory: Path inside the project, None for the cwd
            args: Subcommand-specific arguments, already collected
            resolver: Workspace resolver, defaults to the dispatcher's

        Returns:
            ProcessHandle for the spawned process

        Raises:
            NoProjectError: If no project root can be resolved. Nothing is spawned.
        """
        workspace = (resolver or self.resolver)(working_directory)
        binary = self.config.devcontainer_path
        handle = ProcessHandle(
            binary=binary,
            argv=build_argv(subcommand, workspace, list(args or [])),
            subcommand=" ".join(subcommand.split()),
            workspace=workspace,
            buffer_name=self.output.name,
        )

        overlapping = [h for h in self._live if h.key == handle.key]
        if overlapping:
            logger.warning(
                "devcontainer %s already running for %s (pid %s), starting another",
                handle.subcommand,
                workspace,
                overlapping[0].pid,
            )

        self.output.append(f"$ {handle.command_line}\n")
        launch_error: OSError | None = None
        try:
            handle.process = await asyncio.create_subprocess_exec(
                binary,
                *handle.argv,
                cwd=str(workspace),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            launch_error = e
            logger.error("Failed to start %s: %s", binary, e)
        else:
            logger.info(
                "Started devcontainer %s (pid %d) in %s",
                handle.subcommand,
                handle.process.pid,
                workspace,
            )

        self._live.append(handle)
        handle.task = asyncio.get_running_loop().create_task(
            self._supervise(handle, launch_error),
            name=f"devcontainer {handle.subcommand}",
        )
        return handle

    async def _supervise(
        self,
        handle: ProcessHandle,
        launch_error: OSError | None,
    ) -> None:
        if launch_error is not None:
            handle.status = f"failed to start: {launch_error}"
        else:
            process = handle.process
            assert process is not None
            try:
                if process.stdout is not None:
                    await self._pump(process.stdout)
                handle.returncode = await process.wait()
                handle.status = describe_returncode(handle.returncode)
            except Exception as e:
                logger.exception("Lost track of devcontainer %s", handle.subcommand)
                handle.status = f"supervision failed: {e}"

        self._on_exit(handle)

    async def _pump(self, stream: asyncio.StreamReader) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await stream.read(READ_CHUNK)
            if not chunk:
                break
            self.output.append(decoder.decode(chunk))
        self.output.append(decoder.decode(b"", final=True))

    def _on_exit(self, handle: ProcessHandle) -> None:
        """Completion handler, run exactly once per handle."""
        if handle in self._live:
            self._live.remove(handle)

        self.output.append(f"[devcontainer {handle.subcommand}] {handle.status}\n")

        if handle.returncode == 0:
            handle.state = ProcessState.SUCCEEDED
            self.notifier.success(
                f"devcontainer {handle.subcommand} succeeded",
                handle.subcommand,
            )
        else:
            handle.state = ProcessState.FAILED
            self.notifier.failure(
                f"devcontainer {handle.subcommand} failed: {handle.status}. "
                f"See {handle.buffer_name} for details",
                handle.subcommand,
            )

    async def wait_all(self) -> None:
        """Wait for every live process to finish and notify."""
        tasks = [h.task for h in self.running if h.task is not None]
        if tasks:
            await asyncio.gather(*tasks)
