"""Container name and path validation utilities."""

import os
import re
from typing import Final

# Docker/Podman container names, and hex container ids.
CONTAINER_NAME_PATTERN: Final = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")
MAX_CONTAINER_NAME: Final = 253


def validate_container(name: str) -> str:
    """Validate a container name or id.

    Args:
        name: Container identifier as given by the user

    Returns:
        The stripped identifier

    Raises:
        ValueError: If the identifier is empty, too long or has
            characters a container name cannot contain
    """
    name = name.strip()
    if not name:
        raise ValueError("Container cannot be empty")

    if len(name) > MAX_CONTAINER_NAME:
        raise ValueError(f"Container name too long: {len(name)} chars")

    if not CONTAINER_NAME_PATTERN.match(name):
        raise ValueError(f"Invalid container name: {name!r}")

    return name


def validate_path(path: str) -> str:
    """Validate a path inside a container.

    Relative paths are anchored at the filesystem root; "~" paths are
    left for the container's shell to expand.

    Raises:
        ValueError: If the path is empty or contains a null byte
    """
    if not path:
        raise ValueError("Path cannot be empty")

    # Null bytes truncate arguments in exec()
    if "\x00" in path:
        raise ValueError(f"Path contains null byte: {path!r}")

    if path.startswith("~"):
        return path

    if not path.startswith("/"):
        path = "/" + path

    return os.path.normpath(path)
