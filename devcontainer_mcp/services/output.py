"""Shared output buffer for devcontainer processes."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_NAME = "devcontainer://output"


class OutputBuffer:
    """Named text sink shared by every invocation.

    Concurrent processes append to the same buffer, so their output
    interleaves. When the buffer grows past max_chars the oldest text is
    dropped, leaving three quarters of max_chars.
    """

    def __init__(
        self,
        name: str = DEFAULT_BUFFER_NAME,
        max_chars: int = 200_000,
    ) -> None:
        self.name = name
        self.max_chars = max_chars
        self._chunks: list[str] = []
        self._size = 0
        self._listeners: list[Callable[[str], None]] = []

    def subscribe(self, listener: Callable[[str], None]) -> None:
        """Call listener with every appended chunk (e.g. to echo to a terminal)."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[str], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, text: str) -> None:
        if not text:
            return
        self._chunks.append(text)
        self._size += len(text)
        for listener in self._listeners:
            listener(text)
        if self._size > self.max_chars:
            self._trim()

    def _trim(self) -> None:
        # Trimmed to three quarters of max_chars, not to max_chars
        keep = self.max_chars * 3 // 4
        joined = "".join(self._chunks)[-keep:] if keep else ""
        self._chunks = [joined]
        self._size = len(joined)
        logger.debug("Trimmed %s to %d chars", self.name, self._size)

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def tail(self, lines: int) -> str:
        """Return the last N lines."""
        if lines <= 0:
            return ""
        return "\n".join(self.text.splitlines()[-lines:])

    def clear(self) -> None:
        self._chunks.clear()
        self._size = 0

    def __len__(self) -> int:
        return self._size
