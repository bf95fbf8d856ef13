"""Menu of devcontainer commands.

The top level lists every top-level subcommand and one submenu per command
group ("features", "templates"). Every menu ends with a quit entry that
closes it without running anything.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from devcontainer_mcp.commands import CommandRegistry, PromptError
from devcontainer_mcp.models import CommandDescriptor, ProcessHandle
from devcontainer_mcp.protocols import Prompter
from devcontainer_mcp.services import NoProjectError

if TYPE_CHECKING:
    from devcontainer_mcp.context import AppContext

logger = logging.getLogger(__name__)

QUIT_KEY = "q"


@dataclass
class MenuEntry:
    """One selectable line: a command, a submenu, or quit."""

    key: str
    label: str
    command: CommandDescriptor | None = None
    submenu: "Menu | None" = None

    @property
    def is_quit(self) -> bool:
        return self.command is None and self.submenu is None


@dataclass
class Menu:
    title: str
    entries: list[MenuEntry] = field(default_factory=list)

    def find(self, key: str) -> MenuEntry | None:
        key = key.strip()
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None


def _command_entries(descriptors: list[CommandDescriptor]) -> list[MenuEntry]:
    return [
        MenuEntry(key=str(i), label=d.leaf, command=d)
        for i, d in enumerate(descriptors, 1)
    ]


def _submenu_key(group: str, used: set[str]) -> str:
    for char in group:
        if char.isalpha() and char not in used:
            return char
    return group


def build_menu(registry: CommandRegistry) -> Menu:
    """Build the top-level menu with one submenu per command group."""
    menu = Menu("devcontainer", _command_entries(registry.top_level()))

    used = {QUIT_KEY}
    for group, descriptors in registry.groups().items():
        submenu = Menu(f"devcontainer {group}", _command_entries(descriptors))
        submenu.entries.append(MenuEntry(key=QUIT_KEY, label="quit"))
        key = _submenu_key(group, used)
        used.add(key)
        menu.entries.append(MenuEntry(key=key, label=f"{group} ...", submenu=submenu))

    menu.entries.append(MenuEntry(key=QUIT_KEY, label="quit"))
    return menu


def render_menu(menu: Menu) -> str:
    lines = [menu.title, "-" * len(menu.title)]
    for entry in menu.entries:
        description = entry.command.help if entry.command else ""
        line = f"  {entry.key:>2}  {entry.label}"
        if description:
            line = f"{line:<36}{description}"
        lines.append(line)
    return "\n".join(lines)


async def run_menu(
    context: "AppContext",
    working_directory: Path | str | None,
    prompter: Prompter,
    input_func: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> ProcessHandle | None:
    """Show the menu until a command runs or the user quits.

    Returns:
        The handle of the started process, or None if the menu was closed
        without action or the command was rejected before spawning.
    """
    current = build_menu(context.commands)

    while True:
        write(render_menu(current))
        try:
            choice = await asyncio.to_thread(input_func, "> ")
        except (EOFError, KeyboardInterrupt):
            return None

        entry = current.find(choice)
        if entry is None:
            write(f"Unknown choice: {choice.strip()!r}")
            continue
        if entry.is_quit:
            return None
        if entry.submenu is not None:
            current = entry.submenu
            continue

        assert entry.command is not None
        try:
            return await context.dispatcher.run(
                entry.command, working_directory, prompter
            )
        except (NoProjectError, PromptError) as e:
            logger.warning("devcontainer %s not started: %s", entry.command.name, e)
            write(f"Error: {e}")
            return None
