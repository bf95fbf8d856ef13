"""Application configuration.

Delegates environment parsing to Settings and resolves the two external
executables (devcontainer CLI and container runtime).
"""

import logging
import shutil
from dataclasses import dataclass, field

from devcontainer_mcp.config.settings import Settings

logger = logging.getLogger(__name__)

DEVCONTAINER_CANDIDATES = ("devcontainer",)
RUNTIME_CANDIDATES = ("podman", "docker")


def find_executable(candidates: tuple[str, ...]) -> str:
    """Return the first candidate found on PATH.

    Falls back to the first candidate name so that a missing binary surfaces
    as a launch failure when it is used, not at startup.
    """
    for name in candidates:
        path = shutil.which(name)
        if path:
            return path
    logger.warning("None of %s found on PATH", ", ".join(candidates))
    return candidates[0]


@dataclass
class Config:
    """Application configuration.

    Aggregates environment settings and lazily resolved executable paths.
    """

    settings: Settings = field(default_factory=Settings)
    _devcontainer_path: str | None = field(default=None, init=False, repr=False)
    _runtime_path: str | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment."""
        settings = Settings.from_env()
        logger.debug(
            "Config initialized: transport=%s, remote_method=%s, output_max_chars=%d",
            settings.transport,
            settings.remote_method,
            settings.output_max_chars,
        )
        return cls(settings=settings)

    @property
    def devcontainer_path(self) -> str:
        """Path of the devcontainer CLI.

        Environment: DEVCONTAINER_MCP_DEVCONTAINER_PATH
        Default: `devcontainer` found on PATH
        """
        if self._devcontainer_path is None:
            self._devcontainer_path = (
                self.settings.devcontainer_path
                or find_executable(DEVCONTAINER_CANDIDATES)
            )
        return self._devcontainer_path

    @property
    def runtime_path(self) -> str:
        """Path of the container runtime.

        Environment: DEVCONTAINER_MCP_RUNTIME_PATH
        Default: `podman` or `docker` found on PATH
        """
        if self._runtime_path is None:
            self._runtime_path = self.settings.runtime_path or find_executable(
                RUNTIME_CANDIDATES
            )
        return self._runtime_path

    # Delegate to settings for convenience
    @property
    def transport(self) -> str:
        return self.settings.transport

    @property
    def http_host(self) -> str:
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        return self.settings.http_port

    @property
    def remote_method(self) -> str:
        return self.settings.remote_method

    @property
    def command_timeout(self) -> int:
        """Timeout in seconds for commands run with container_exec."""
        return self.settings.command_timeout

    @property
    def output_max_chars(self) -> int:
        return self.settings.output_max_chars

    @property
    def notification_history(self) -> int:
        return self.settings.notification_history
