"""Entry point for devcontainer_mcp.

    python -m devcontainer_mcp            # serve MCP (stdio or http)
    python -m devcontainer_mcp menu [DIR] # interactive command menu
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from devcontainer_mcp.commands import ConsolePrompter
from devcontainer_mcp.remote import register_remote_method
from devcontainer_mcp.server import mcp  # This imports also configures logging
from devcontainer_mcp.services.state import get_context
from devcontainer_mcp.ui import run_menu

logger = logging.getLogger(__name__)


def _quiet_third_party_loggers() -> None:
    """Reduce noise from third-party libraries."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)


def configure_logging() -> None:
    """Configure additional logging settings for direct execution.

    Note: Core logging is already configured in server.py at import time.
    This just quiets noisy third-party loggers when running via __main__.
    """
    config = get_context().config
    _quiet_third_party_loggers()

    logger.info(
        "Logging configured: level=%s, transport=%s",
        config.settings.log_level,
        config.transport,
    )


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_context().config
    configure_logging()

    if config.transport == "stdio":
        logger.info("Starting devcontainer MCP server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting devcontainer MCP server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


async def _menu_session(directory: Path) -> int:
    context = get_context()
    register_remote_method(context.remote_methods, context.config)

    def echo(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    context.output.subscribe(echo)
    try:
        handle = await run_menu(context, directory, ConsolePrompter())
        if handle is None:
            return 0
        await handle.wait()
        return 0 if handle.returncode == 0 else 1
    finally:
        context.output.unsubscribe(echo)
        await context.cleanup()


def run_menu_cli(directory: str | None = None) -> int:
    """Show the command menu on the terminal and wait for the chosen command.

    Returns:
        Exit status: 0 when nothing ran or the command succeeded, 1 otherwise.
    """
    start = Path(directory) if directory else Path.cwd()
    return asyncio.run(_menu_session(start))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="devcontainer-mcp",
        description="Run devcontainer CLI subcommands from MCP clients or a terminal menu.",
    )
    subparsers = parser.add_subparsers(dest="mode")
    subparsers.add_parser("serve", help="run the MCP server (default)")
    menu_parser = subparsers.add_parser("menu", help="pick a command from a menu")
    menu_parser.add_argument(
        "directory",
        nargs="?",
        help="directory inside the project (default: current directory)",
    )

    args = parser.parse_args(argv)

    if args.mode == "menu":
        return run_menu_cli(args.directory)

    run_server()
    return 0


if __name__ == "__main__":
    sys.exit(main())
