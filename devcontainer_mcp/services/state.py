"""Process-wide application context for MCP handlers."""

from devcontainer_mcp.context import AppContext

# Global state (initialized on first access)
_context: AppContext | None = None


def get_context() -> AppContext:
    """Get or create the application context."""
    global _context
    if _context is None:
        _context = AppContext.create()
    return _context


def set_context(context: AppContext) -> None:
    """Set the global context instance.

    Allows tests to inject a custom context without modifying module internals.

    Args:
        context: AppContext instance to use globally.
    """
    global _context
    _context = context


def reset_state() -> None:
    """Reset global state for testing.

    Should only be used in test fixtures.
    """
    global _context
    _context = None
