"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Logger name prefix -> color
COMPONENT_COLORS = {
    "devcontainer_mcp.server": COLORS["bright_cyan"],
    "devcontainer_mcp.services.dispatcher": COLORS["bright_magenta"],
    "devcontainer_mcp.services.notify": COLORS["bright_green"],
    "devcontainer_mcp.remote": COLORS["bright_blue"],
    "devcontainer_mcp.tools": COLORS["cyan"],
    "devcontainer_mcp.resources": COLORS["cyan"],
    "devcontainer_mcp.middleware": COLORS["yellow"],
    "devcontainer_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

PACKAGE_PREFIX = "devcontainer_mcp."

URI_PATTERN = re.compile(r"(\w+://[^\s]+)")
DURATION_PATTERN = re.compile(r"(\d+\.?\d*ms)")
PID_PATTERN = re.compile(r"(pid \d+)")
EXIT_PATTERN = re.compile(r"((?:exited abnormally with code|killed by) \w+)")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with local timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX) :]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<22}", color)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight URIs, durations, pids and exit statuses."""
        if not self.use_colors:
            return message

        for pattern, color in (
            (URI_PATTERN, COLORS["bright_blue"]),
            (DURATION_PATTERN, COLORS["bright_yellow"]),
            (PID_PATTERN, COLORS["bright_magenta"]),
            (EXIT_PATTERN, COLORS["bright_red"]),
        ):
            message = pattern.sub(f"{color}\\1{COLORS['reset']}", message)
        return message


class MCPRequestFormatter(ColorfulFormatter):
    """Extended formatter with a leading event indicator."""

    INDICATORS = (
        (("starting", "ready", "started"), "bright_green", ">>>"),
        (("shutting down", "shutdown"), "bright_red", "<<<"),
        (("error", "failed"), "bright_red", "!! "),
        (("warning", "slow", "already running"), "bright_yellow", "!  "),
        (("succeeded", "completed"), "bright_green", "OK "),
        (("registered",), "bright_cyan", "+  "),
        (("waiting",), "bright_magenta", "~  "),
    )

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        for words, color, marker in self.INDICATORS:
            if any(word in message for word in words):
                return f"{COLORS[color]}{marker}{COLORS['reset']} {base}"
        return f"    {base}"
