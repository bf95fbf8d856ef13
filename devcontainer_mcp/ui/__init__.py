"""Interactive menu for devcontainer commands."""

from devcontainer_mcp.ui.menu import Menu, MenuEntry, build_menu, render_menu, run_menu

__all__ = ["Menu", "MenuEntry", "build_menu", "render_menu", "run_menu"]
