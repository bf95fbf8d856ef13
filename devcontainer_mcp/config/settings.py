"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEVCONTAINER_MCP_"


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Executables (None means search PATH)
    devcontainer_path: str | None = field(default=None)
    runtime_path: str | None = field(default=None)

    # Shared output buffer
    output_max_chars: int = field(default=200_000)
    notification_history: int = field(default=50)

    # Remote access
    remote_method: str = field(default="devcontainer")
    command_timeout: int = field(default=30)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from DEVCONTAINER_MCP_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            devcontainer_path=cls._get_str("DEVCONTAINER_PATH"),
            runtime_path=cls._get_str("RUNTIME_PATH"),
            output_max_chars=cls._get_int("OUTPUT_MAX_CHARS", 200_000),
            notification_history=cls._get_int("NOTIFICATION_HISTORY", 50),
            remote_method=cls._get_str("REMOTE_METHOD") or "devcontainer",
            command_timeout=cls._get_int("COMMAND_TIMEOUT", 30),
            transport=cls._get_transport(),
            http_host=cls._get_str("HTTP_HOST") or "127.0.0.1",
            http_port=cls._get_int("HTTP_PORT", 8000),
            log_level=(cls._get_str("LOG_LEVEL") or "INFO").upper(),
            log_colors=cls._get_bool("LOG_COLORS", True),
            log_payloads=cls._get_bool("LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_str(key: str) -> str | None:
        value = os.getenv(ENV_PREFIX + key, "").strip()
        return value or None

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key without prefix
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default

        try:
            parsed = int(value)
        except ValueError:
            logger.warning(
                "Invalid int for %s%s: %s, using default %d",
                ENV_PREFIX,
                key,
                value,
                default,
            )
            return default

        if parsed <= 0:
            logger.warning(
                "%s%s must be > 0, got %d. Using default: %d",
                ENV_PREFIX,
                key,
                parsed,
                default,
            )
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv(ENV_PREFIX + "TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
