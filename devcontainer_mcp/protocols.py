"""Protocol interfaces for dependency inversion.

Defines the seams between the dispatcher and whatever host drives it
(an MCP client, the console menu, or a test).

Usage Example:

    from devcontainer_mcp.protocols import Notifier

    class PrintNotifier:
        def success(self, message: str, subcommand: str = "") -> None:
            print("OK", message)

        def failure(self, message: str, subcommand: str = "") -> None:
            print("FAILED", message)

    dispatcher = Dispatcher(config, output, PrintNotifier())
"""

from typing import Protocol, runtime_checkable

from devcontainer_mcp.models import ArgSpec


@runtime_checkable
class Prompter(Protocol):
    """Protocol for collecting interactive argument values.

    Each method returns the raw answer. Validation happens in gather_args.
    Implementations raise PromptCancelled when the user dismisses a prompt.
    """

    async def read_text(self, spec: ArgSpec) -> str:
        """Read a free-text value."""
        ...

    async def read_shell_command(self, spec: ArgSpec) -> str:
        """Read a shell command line, later split into words."""
        ...

    async def read_file_name(self, spec: ArgSpec) -> str:
        """Read a file or directory path."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Protocol for status-line notifications.

    Called exactly once per finished process, from the event loop.
    """

    def success(self, message: str, subcommand: str = "") -> None:
        """Report a successful run."""
        ...

    def failure(self, message: str, subcommand: str = "") -> None:
        """Report a failed run (non-zero exit, signal or launch failure)."""
        ...


__all__ = ["Notifier", "Prompter"]
