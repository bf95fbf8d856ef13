"""Process supervision data models."""

import asyncio
import signal
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ProcessState(str, Enum):
    """Lifecycle of a supervised process."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(eq=False)
class ProcessHandle:
    """A spawned devcontainer process and its completion task."""

    binary: str
    argv: list[str]
    subcommand: str
    workspace: Path
    buffer_name: str
    process: asyncio.subprocess.Process | None = None
    task: asyncio.Task | None = field(default=None, repr=False)
    state: ProcessState = ProcessState.RUNNING
    status: str = ""
    returncode: int | None = None
    started_at: datetime = field(default_factory=datetime.now)

    @property
    def pid(self) -> int | None:
        return self.process.pid if self.process is not None else None

    @property
    def command_line(self) -> str:
        return " ".join([self.binary, *self.argv])

    @property
    def key(self) -> tuple[str, str]:
        """Identity used to detect overlapping runs."""
        return (self.subcommand, str(self.workspace))

    async def wait(self) -> "ProcessHandle":
        """Wait until the completion handler has run."""
        if self.task is not None:
            await asyncio.shield(self.task)
        return self


def describe_returncode(returncode: int) -> str:
    """Render a process return code the way a shell reports it.

    Negative codes from asyncio mean the process died from a signal.
    """
    if returncode == 0:
        return "finished"
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = f"signal {-returncode}"
        return f"killed by {name}"
    return f"exited abnormally with code {returncode}"


@dataclass
class Notification:
    """A status-line message emitted when a process completes."""

    level: str
    message: str
    subcommand: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_failure(self) -> bool:
        return self.level == "error"
