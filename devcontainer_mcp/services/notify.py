"""Status notifications for finished processes."""

import logging
from collections import deque

from devcontainer_mcp.models import Notification

logger = logging.getLogger(__name__)


class NotificationLog:
    """Notifier that logs each message and keeps a bounded history.

    The history backs the devcontainer_status tool, standing in for an
    editor's transient status line.
    """

    def __init__(self, history: int = 50) -> None:
        self._history: deque[Notification] = deque(maxlen=history)

    def success(self, message: str, subcommand: str = "") -> None:
        logger.info("%s", message)
        self._history.append(Notification("info", message, subcommand))

    def failure(self, message: str, subcommand: str = "") -> None:
        logger.error("%s", message)
        self._history.append(Notification("error", message, subcommand))

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def recent(self, count: int = 10) -> list[Notification]:
        if count <= 0:
            return []
        return list(self._history)[-count:]

    def clear(self) -> None:
        self._history.clear()
