"""MCP server exposing devcontainer CLI subcommands and container shells."""

__version__ = "0.1.0"
