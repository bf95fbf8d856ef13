"""Registry of remote access methods.

The devcontainer method reaches a shell inside a running container through
`devcontainer exec --workspace-folder . --container-id <id> <shell> -l`.
"""

import logging
from collections.abc import Awaitable, Callable

from devcontainer_mcp.config import Config
from devcontainer_mcp.models import (
    HOST_PLACEHOLDER,
    LOGIN_PLACEHOLDER,
    OWN_REMOTE_PATH,
    RemoteMethod,
)
from devcontainer_mcp.remote.candidates import list_candidates

logger = logging.getLogger(__name__)

CompletionFunction = Callable[[], Awaitable[list[str]]]

DEFAULT_REMOTE_PATH = (
    "/bin",
    "/usr/bin",
    "/sbin",
    "/usr/sbin",
    "/usr/local/bin",
    "/usr/local/sbin",
)

DEVCONTAINER_LOGIN_ARGS = (
    "exec",
    "--workspace-folder",
    ".",
    "--container-id",
    HOST_PLACEHOLDER,
    LOGIN_PLACEHOLDER,
)


class UnknownMethodError(KeyError):
    """Remote method is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown method"


class RemoteMethodRegistry:
    """Table of remote methods plus the remote PATH search list.

    Registering a method replaces any method of the same name and leaves
    every other entry untouched.
    """

    def __init__(self) -> None:
        self._methods: dict[str, RemoteMethod] = {}
        self._completions: dict[str, CompletionFunction] = {}
        self.remote_path: list[str] = list(DEFAULT_REMOTE_PATH)

    def register(
        self,
        method: RemoteMethod,
        completion: CompletionFunction | None = None,
    ) -> None:
        if method.name in self._methods:
            logger.debug("Replacing remote method: %s", method.name)
        self._methods[method.name] = method
        if completion is not None:
            self._completions[method.name] = completion
        else:
            self._completions.pop(method.name, None)

    def add_remote_path(self, entry: str) -> None:
        """Append to the remote PATH list unless already present."""
        if entry not in self.remote_path:
            self.remote_path.append(entry)

    def get(self, name: str) -> RemoteMethod:
        try:
            return self._methods[name]
        except KeyError:
            available = ", ".join(sorted(self._methods)) or "(none)"
            raise UnknownMethodError(
                f"Unknown remote method '{name}'. Available: {available}"
            ) from None

    async def candidates(self, name: str) -> list[str]:
        """Completion candidates for a method, empty if it has none."""
        self.get(name)
        completion = self._completions.get(name)
        if completion is None:
            return []
        return await completion()

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __len__(self) -> int:
        return len(self._methods)

    @property
    def methods(self) -> list[RemoteMethod]:
        return list(self._methods.values())

    def clear(self) -> None:
        self._methods.clear()
        self._completions.clear()
        self.remote_path = list(DEFAULT_REMOTE_PATH)


def devcontainer_method(config: Config) -> RemoteMethod:
    """Build the devcontainer remote method from config."""
    return RemoteMethod(
        name=config.remote_method,
        login_program=config.devcontainer_path,
        login_args=DEVCONTAINER_LOGIN_ARGS,
        remote_shell="/bin/sh",
        remote_shell_login=("-l",),
        remote_shell_args=("-i", "-c"),
    )


def register_remote_method(
    registry: RemoteMethodRegistry,
    config: Config,
) -> RemoteMethod:
    """Register the devcontainer method and its container-name completion.

    Safe to call repeatedly: the method entry is replaced and the remote
    path marker is only appended once.
    """
    method = devcontainer_method(config)

    async def complete() -> list[str]:
        return await list_candidates(config.runtime_path)

    registry.register(method, completion=complete)
    registry.add_remote_path(OWN_REMOTE_PATH)
    logger.info(
        "Registered remote method '%s' (login via %s)",
        method.name,
        method.login_program,
    )
    return method
