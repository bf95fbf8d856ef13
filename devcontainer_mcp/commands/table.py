"""Declarative table of supported devcontainer subcommands."""

import logging

from devcontainer_mcp.models import ArgSpec, CommandDescriptor

logger = logging.getLogger(__name__)


class UnknownCommandError(KeyError):
    """Subcommand is not in the registry."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown command"


COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor("up", help="Create and run the dev container"),
    CommandDescriptor(
        "set-up",
        args=(ArgSpec.text("container_id", "Container id: ", flag="--container-id"),),
        help="Set up an existing container as a dev container",
    ),
    CommandDescriptor(
        "run-user-commands", help="Run user commands (postCreateCommand etc.)"
    ),
    CommandDescriptor("read-configuration", help="Read the devcontainer configuration"),
    CommandDescriptor("outdated", help="Show current and available versions"),
    CommandDescriptor("upgrade", help="Upgrade the lockfile"),
    CommandDescriptor("build", help="Build the dev container image"),
    CommandDescriptor(
        "exec",
        args=(ArgSpec.shell("command", "Command: "),),
        help="Execute a command in the running dev container",
    ),
    CommandDescriptor("features test", help="Test features"),
    CommandDescriptor(
        "features package",
        args=(ArgSpec.file("target", "Feature folder to package: "),),
        help="Package features",
    ),
    CommandDescriptor(
        "features publish",
        args=(ArgSpec.file("target", "Feature folder to publish: "),),
        help="Package and publish features",
    ),
    CommandDescriptor(
        "features info",
        args=(
            ArgSpec.literal("manifest"),
            ArgSpec.text("feature", "Feature id: "),
        ),
        help="Fetch metadata for a published feature",
    ),
    CommandDescriptor(
        "features resolve-dependencies",
        help="Compute the feature installation order",
    ),
    CommandDescriptor("features generate-docs", help="Generate feature documentation"),
    CommandDescriptor(
        "templates apply",
        args=(ArgSpec.text("template_id", "Template id: ", flag="--template-id"),),
        help="Apply a template to the project",
    ),
    CommandDescriptor(
        "templates publish",
        args=(ArgSpec.file("target", "Template folder to publish: "),),
        help="Package and publish templates",
    ),
    CommandDescriptor(
        "templates generate-docs", help="Generate template documentation"
    ),
)


class CommandRegistry:
    """Registry of command descriptors keyed by subcommand name.

    Registering a descriptor with an existing name replaces it.
    """

    def __init__(self, descriptors: tuple[CommandDescriptor, ...] = ()) -> None:
        self._commands: dict[str, CommandDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    @classmethod
    def default(cls) -> "CommandRegistry":
        """Registry holding the full devcontainer command table."""
        return cls(COMMANDS)

    def register(self, descriptor: CommandDescriptor) -> None:
        key = " ".join(descriptor.words)
        if key in self._commands:
            logger.debug("Replacing command descriptor: %s", key)
        self._commands[key] = descriptor

    def get(self, name: str) -> CommandDescriptor:
        """Look up a descriptor by subcommand path.

        Raises:
            UnknownCommandError: If no descriptor has that name.
        """
        key = " ".join(name.split())
        try:
            return self._commands[key]
        except KeyError:
            available = ", ".join(self._commands)
            raise UnknownCommandError(
                f"Unknown command '{name}'. Available: {available}"
            ) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and " ".join(name.split()) in self._commands

    def __iter__(self):
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def top_level(self) -> list[CommandDescriptor]:
        return [d for d in self if d.group is None]

    def groups(self) -> dict[str, list[CommandDescriptor]]:
        """Nested subcommands grouped by their parent word, in table order."""
        grouped: dict[str, list[CommandDescriptor]] = {}
        for descriptor in self:
            if descriptor.group is not None:
                grouped.setdefault(descriptor.group, []).append(descriptor)
        return grouped

    def clear(self) -> None:
        self._commands.clear()
