"""Application context for devcontainer MCP.

Holds the registries and shared resources that would otherwise be global
mutable state. Create one at startup, pass it to whatever needs it, and
clean it up at shutdown.
"""

import logging
from dataclasses import dataclass

from devcontainer_mcp.commands.table import CommandRegistry
from devcontainer_mcp.config import Config
from devcontainer_mcp.remote.registry import RemoteMethodRegistry
from devcontainer_mcp.services.dispatcher import Dispatcher
from devcontainer_mcp.services.notify import NotificationLog
from devcontainer_mcp.services.output import OutputBuffer

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container for devcontainer MCP dependencies.

    Example:
        context = AppContext.create()
        register_remote_method(context.remote_methods, context.config)
        handle = await context.dispatcher.invoke("up", "/src/project")
    """

    config: Config
    commands: CommandRegistry
    remote_methods: RemoteMethodRegistry
    output: OutputBuffer
    notifications: NotificationLog
    dispatcher: Dispatcher

    @classmethod
    def create(cls) -> "AppContext":
        """Create a context with configuration read from the environment."""
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(cls, config: Config) -> "AppContext":
        """Create a context around a custom Config.

        Args:
            config: Config instance to use

        Returns:
            AppContext with the default command table and empty remote registry
        """
        output = OutputBuffer(max_chars=config.output_max_chars)
        notifications = NotificationLog(history=config.notification_history)
        return cls(
            config=config,
            commands=CommandRegistry.default(),
            remote_methods=RemoteMethodRegistry(),
            output=output,
            notifications=notifications,
            dispatcher=Dispatcher(config, output, notifications),
        )

    async def cleanup(self) -> None:
        """Wait for running processes, then drop the registered remote methods.

        The command table is left alone; descriptors never change after startup.
        """
        running = self.dispatcher.running
        if running:
            logger.info(
                "Waiting for %d running devcontainer process(es): %s",
                len(running),
                ", ".join(h.subcommand for h in running),
            )
            await self.dispatcher.wait_all()
        self.remote_methods.clear()
