"""Resources for the shared output buffer and the command menu."""

from devcontainer_mcp.services.state import get_context
from devcontainer_mcp.ui import build_menu, render_menu


async def output_resource() -> str:
    """Raw output of every devcontainer process, oldest first.

    Concurrent processes interleave here; each run starts with a `$ ...`
    command line and ends with a `[devcontainer <subcommand>] <status>` line.
    """
    context = get_context()
    return context.output.text or "(no output yet)"


async def menu_resource() -> str:
    """Menu of devcontainer commands with their submenus."""
    context = get_context()
    menu = build_menu(context.commands)

    sections = [render_menu(menu)]
    for entry in menu.entries:
        if entry.submenu is not None:
            sections.append(render_menu(entry.submenu))

    return "\n\n".join(sections)
