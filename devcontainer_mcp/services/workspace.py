"""Project root (workspace folder) resolution."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Checked in order at each directory level while walking up.
DEVCONTAINER_MARKERS = (".devcontainer", ".devcontainer.json")
VCS_MARKERS = (".git", ".hg", ".svn")


class NoProjectError(RuntimeError):
    """No project root could be resolved for the command."""


def find_project_root(start: Path | str | None = None) -> Path | None:
    """Walk up from start looking for a project root.

    A directory holding devcontainer configuration wins over one that is
    only a VCS root, so a devcontainer nested in a monorepo is found first.

    Returns:
        The project root, or None when nothing matches.
    """
    origin = Path(start).expanduser() if start is not None else Path.cwd()
    try:
        origin = origin.resolve()
    except OSError:
        return None
    if not origin.exists():
        return None
    if origin.is_file():
        origin = origin.parent

    for markers in (DEVCONTAINER_MARKERS, VCS_MARKERS):
        for directory in (origin, *origin.parents):
            if any((directory / marker).exists() for marker in markers):
                return directory
    return None


def resolve_workspace(start: Path | str | None = None) -> Path:
    """Resolve the workspace folder for a command.

    Raises:
        NoProjectError: If start is not inside any project.
    """
    root = find_project_root(start)
    if root is None:
        where = start if start is not None else Path.cwd()
        raise NoProjectError(f"No active project at {where}")
    logger.debug("Resolved workspace %s -> %s", start, root)
    return root
