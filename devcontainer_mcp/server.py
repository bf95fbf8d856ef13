"""devcontainer MCP FastMCP server.

This is a thin wrapper that wires together the MCP server with tools and resources.
All business logic is delegated to the commands/, remote/, and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from devcontainer_mcp.config import Settings
from devcontainer_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from devcontainer_mcp.remote import register_remote_method
from devcontainer_mcp.resources import (
    container_file_resource,
    containers_list_resource,
    menu_resource,
    output_resource,
    remote_methods_resource,
)
from devcontainer_mcp.services.state import get_context
from devcontainer_mcp.tools import (
    container_exec,
    devcontainer,
    devcontainer_commands,
    devcontainer_status,
    list_containers,
)
from devcontainer_mcp.utils.console import MCPRequestFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the devcontainer_mcp package.

    Called at module load time so logging is set up before any loggers are
    used, regardless of how the server is started. Logs go to stderr, which
    keeps stdout free for the stdio transport. Level and colors come from
    ``Settings.log_level`` and ``Settings.log_colors``.
    """
    settings = Settings.from_env()
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("devcontainer_mcp")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    else:
        for handler in package_logger.handlers:
            if isinstance(handler.formatter, MCPRequestFormatter):
                handler.formatter.use_colors = use_colors

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "mcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Register the remote method for the lifetime of a server session.

    Depending on the fastmcp version this runs once per server or once per
    client session, so it only re-registers (idempotent) on entry and leaves
    the shared context untouched on exit. Processes started by a session
    keep running and keep reporting to the shared buffer after it closes.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the registered method name and executable paths
    """
    logger.info("devcontainer MCP server starting up")

    context = get_context()
    config = context.config
    method = register_remote_method(context.remote_methods, config)

    logger.info(
        "Using devcontainer=%s runtime=%s (%d commands)",
        config.devcontainer_path,
        config.runtime_path,
        len(context.commands),
    )
    logger.info("devcontainer MCP server ready to accept connections")

    try:
        yield {
            "remote_method": method.name,
            "devcontainer": config.devcontainer_path,
            "runtime": config.runtime_path,
        }
    finally:
        logger.info("devcontainer MCP session shutting down")
        running = context.dispatcher.running
        if running:
            logger.info(
                "Leaving %d devcontainer process(es) running: %s",
                len(running),
                ", ".join(h.subcommand for h in running),
            )
        logger.info("devcontainer MCP session shutdown complete")


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging (with integrated timing)

    Environment variables:
        DEVCONTAINER_MCP_LOG_PAYLOADS: "true" to log request/response payloads
        DEVCONTAINER_MCP_SLOW_THRESHOLD_MS: Slow request warning threshold (default: 1000)
        DEVCONTAINER_MCP_INCLUDE_TRACEBACK: "true" to include tracebacks in error logs

    Args:
        server: The FastMCP server to configure.
    """
    settings = get_context().config.settings

    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware, tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP(
        "devcontainer_mcp",
        lifespan=app_lifespan,
    )

    configure_middleware(server)

    server.tool()(devcontainer)
    server.tool()(devcontainer_commands)
    server.tool()(devcontainer_status)
    server.tool()(list_containers)
    server.tool()(container_exec)

    server.resource(
        "devcontainer://output",
        name="devcontainer output",
        mime_type="text/plain",
    )(output_resource)
    server.resource(
        "devcontainer://menu",
        name="devcontainer menu",
        mime_type="text/plain",
    )(menu_resource)
    server.resource(
        "containers://list",
        name="running containers",
        mime_type="text/plain",
    )(containers_list_resource)
    server.resource(
        "remote://methods",
        name="remote methods",
        mime_type="text/plain",
    )(remote_methods_resource)
    # Registered last so the static devcontainer:// URIs above take precedence
    server.resource(
        "devcontainer://{container}/{path*}",
        name="container filesystem",
        description="Read files inside a running container",
        mime_type="text/plain",
    )(container_file_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
