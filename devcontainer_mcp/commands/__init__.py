"""Devcontainer command table and argument prompts."""

from devcontainer_mcp.commands.prompts import (
    ConsolePrompter,
    ElicitPrompter,
    PromptCancelled,
    PromptError,
    SuppliedValuePrompter,
    gather_args,
)
from devcontainer_mcp.commands.table import (
    COMMANDS,
    CommandRegistry,
    UnknownCommandError,
)

__all__ = [
    "COMMANDS",
    "CommandRegistry",
    "ConsolePrompter",
    "ElicitPrompter",
    "PromptCancelled",
    "PromptError",
    "SuppliedValuePrompter",
    "UnknownCommandError",
    "gather_args",
]
