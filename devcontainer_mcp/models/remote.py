"""Remote access method data models."""

from dataclasses import dataclass

HOST_PLACEHOLDER = "%h"
LOGIN_PLACEHOLDER = "%l"

# Marker in the remote path list meaning "the PATH of the container's login shell".
OWN_REMOTE_PATH = "<own-remote-path>"


@dataclass(frozen=True)
class RemoteMethod:
    """A named way of reaching a shell inside a container.

    login_args is a template. HOST_PLACEHOLDER is replaced with the container
    identifier and LOGIN_PLACEHOLDER with the remote shell plus login flags.
    """

    name: str
    login_program: str
    login_args: tuple[str, ...]
    remote_shell: str = "/bin/sh"
    remote_shell_login: tuple[str, ...] = ("-l",)
    remote_shell_args: tuple[str, ...] = ("-i", "-c")


@dataclass
class RemoteAddress:
    """Parsed "/method:container:/path" address."""

    method: str
    container: str
    path: str = "/"

    def __str__(self) -> str:
        return f"/{self.method}:{self.container}:{self.path}"
