"""Error handling middleware for consistent error logging."""

import logging
import traceback
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from devcontainer_mcp.commands import PromptError, UnknownCommandError
from devcontainer_mcp.middleware.base import DevcontainerMiddleware
from devcontainer_mcp.remote import UnknownMethodError
from devcontainer_mcp.services import NoProjectError

ErrorCallback = Callable[[Exception, MiddlewareContext], None]

# Caused by user input, not by a fault in the server
USER_ERRORS: tuple[type[Exception], ...] = (
    NoProjectError,
    PromptError,
    UnknownCommandError,
    UnknownMethodError,
)


class ErrorHandlingMiddleware(DevcontainerMiddleware):
    """Middleware that logs escaped exceptions and counts them by type.

    User errors (no project, bad prompt answer, unknown command or method)
    are logged at WARNING without traceback; everything else at ERROR.
    The exception is always re-raised.

    Example:
        >>> def on_error(exc, ctx):
        ...     print(f"Error in {ctx.method}: {exc}")
        >>> mcp.add_middleware(ErrorHandlingMiddleware(error_callback=on_error))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to include full traceback in logs.
            error_callback: Optional callback called on each error.
                Receives (exception, context) as arguments.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._error_counts: dict[str, int] = defaultdict(int)

    def get_error_stats(self) -> dict[str, int]:
        """Get error counts keyed by exception type name."""
        return dict(self._error_counts)

    def reset_stats(self) -> None:
        self._error_counts.clear()

    def _log(self, method: str, error: Exception) -> None:
        error_type = type(error).__name__
        if isinstance(error, USER_ERRORS):
            self.logger.warning("Rejected %s: %s: %s", method, error_type, error)
        elif self.include_traceback:
            self.logger.error(
                "Error in %s: %s: %s\n%s",
                method,
                error_type,
                error,
                traceback.format_exc(),
            )
        else:
            self.logger.error("Error in %s: %s: %s", method, error_type, error)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log and count errors raised while handling a request.

        Raises:
            Exception: Re-raises the original exception after logging.
        """
        try:
            return await call_next(context)

        except Exception as e:
            self._error_counts[type(e).__name__] += 1
            self._log(context.method, e)

            if self.error_callback:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)

            raise
