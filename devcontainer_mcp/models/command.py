"""Command descriptor data models."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ArgKind(str, Enum):
    """How an argument value is obtained."""

    LITERAL = "literal"
    TEXT = "text"
    SHELL = "shell"
    FILE = "file"


@dataclass(frozen=True)
class ArgSpec:
    """One argument of a devcontainer subcommand.

    Literal arguments carry their value. Every other kind is collected by
    prompting the user before the process is spawned.
    """

    kind: ArgKind
    name: str = ""
    value: str = ""
    prompt: str = ""
    flag: str | None = None
    must_exist: bool = False

    @classmethod
    def literal(cls, value: str) -> "ArgSpec":
        return cls(kind=ArgKind.LITERAL, value=value)

    @classmethod
    def text(cls, name: str, prompt: str, flag: str | None = None) -> "ArgSpec":
        return cls(kind=ArgKind.TEXT, name=name, prompt=prompt, flag=flag)

    @classmethod
    def shell(cls, name: str, prompt: str) -> "ArgSpec":
        return cls(kind=ArgKind.SHELL, name=name, prompt=prompt)

    @classmethod
    def file(
        cls,
        name: str,
        prompt: str,
        must_exist: bool = True,
        flag: str | None = None,
    ) -> "ArgSpec":
        return cls(
            kind=ArgKind.FILE,
            name=name,
            prompt=prompt,
            flag=flag,
            must_exist=must_exist,
        )

    @property
    def is_interactive(self) -> bool:
        return self.kind is not ArgKind.LITERAL


WorkspaceResolver = Callable[[Path | str | None], Path]


@dataclass(frozen=True)
class CommandDescriptor:
    """Declarative definition of one devcontainer subcommand.

    Attributes:
        name: Subcommand path, words separated by spaces ("features test").
        args: Ordered argument specs appended after the subcommand path.
        help: Short description shown in menus and tool listings.
        resolve_workspace: Optional override for locating the project root.
    """

    name: str
    args: tuple[ArgSpec, ...] = ()
    help: str = ""
    resolve_workspace: WorkspaceResolver | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def words(self) -> list[str]:
        """Subcommand path split into argv words."""
        return self.name.split()

    @property
    def group(self) -> str | None:
        """Parent group for nested subcommands ("features"), else None."""
        words = self.words
        return words[0] if len(words) > 1 else None

    @property
    def leaf(self) -> str:
        """Last word of the subcommand path."""
        return self.words[-1]

    @property
    def interactive_args(self) -> list[ArgSpec]:
        return [a for a in self.args if a.is_interactive]


@dataclass
class CommandResult:
    """Result of a command run inside a container."""

    output: str
    error: str
    returncode: int
