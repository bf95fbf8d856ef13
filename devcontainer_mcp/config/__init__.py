"""Configuration module for devcontainer MCP.

- Config: Main configuration class (settings plus resolved executables)
- Settings: Environment variable configuration
"""

from devcontainer_mcp.config.main import Config, find_executable
from devcontainer_mcp.config.settings import Settings

__all__ = ["Config", "Settings", "find_executable"]
