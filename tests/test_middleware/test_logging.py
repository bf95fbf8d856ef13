"""Tests for logging middleware."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from devcontainer_mcp.middleware.logging import LoggingMiddleware


def rendered(method: MagicMock, level_arg: bool = False) -> list[str]:
    """Format each recorded logger call the way logging would."""
    messages = []
    for call in method.call_args_list:
        args = call.args[1:] if level_arg else call.args
        messages.append(args[0] % args[1:])
    return messages


@pytest.fixture
def mock_tool_context() -> MagicMock:
    """Create a mock middleware context for tool calls."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "devcontainer"
    context.message.arguments = {"command": "up", "workspace_folder": "/src/app"}
    return context


@pytest.fixture
def mock_resource_context() -> MagicMock:
    """Create a mock middleware context for resource reads."""
    context = MagicMock()
    context.method = "resources/read"
    context.message = MagicMock()
    context.message.uri = "devcontainer://output"
    return context


@pytest.mark.asyncio
async def test_logs_tool_call_and_completion(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    call_next = AsyncMock(return_value="Started devcontainer up\n$ devcontainer up")

    await middleware.on_call_tool(mock_tool_context, call_next)

    assert rendered(mock_logger.info) == [
        ">>> TOOL: devcontainer(command='up', workspace_folder='/src/app')"
    ]
    [completed] = rendered(mock_logger.log, level_arg=True)
    assert completed.startswith("<<< TOOL: devcontainer -> 41 chars, 2 lines [")


@pytest.mark.asyncio
async def test_logs_resource_read(mock_resource_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_read_resource(mock_resource_context, AsyncMock(return_value="x"))

    assert rendered(mock_logger.info) == [">>> RESOURCE: devcontainer://output"]
    [completed] = rendered(mock_logger.log, level_arg=True)
    assert completed.startswith("<<< RESOURCE: devcontainer://output -> 1 chars [")


@pytest.mark.asyncio
async def test_payloads_truncated(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(
        logger=mock_logger, include_payloads=True, max_payload_length=20
    )
    mock_tool_context.message.arguments = {"values": {"command": "x" * 100}}

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    assert any(m.endswith("... [truncated]") for m in rendered(mock_logger.debug))


@pytest.mark.asyncio
async def test_logs_errors(mock_resource_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    with pytest.raises(FileNotFoundError):
        await middleware.on_read_resource(
            mock_resource_context, AsyncMock(side_effect=FileNotFoundError("gone"))
        )

    mock_logger.error.assert_called_once()
    [failed] = rendered(mock_logger.error)
    assert failed.startswith(
        "!!! RESOURCE: devcontainer://output -> FileNotFoundError: gone ["
    )


@pytest.mark.asyncio
async def test_on_message_skips_handled_methods(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    result = await middleware.on_message(mock_tool_context, AsyncMock(return_value="r"))

    assert result == "r"
    mock_logger.info.assert_not_called()
    mock_logger.debug.assert_not_called()


@pytest.mark.asyncio
async def test_on_message_logs_other_methods() -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    context = MagicMock()
    context.method = "tools/list"

    await middleware.on_message(context, AsyncMock(return_value=[]))

    messages = rendered(mock_logger.debug)
    assert messages[0] == ">>> MCP: tools/list"
    assert messages[1].startswith("<<< MCP: tools/list [")


@pytest.mark.asyncio
async def test_slow_requests_logged_as_warning(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger, slow_threshold_ms=1.0)

    async def slow_handler(_: MagicMock) -> str:
        await asyncio.sleep(0.01)
        return "result"

    await middleware.on_call_tool(mock_tool_context, slow_handler)

    level = mock_logger.log.call_args_list[0][0][0]
    assert level == logging.WARNING
    assert rendered(mock_logger.log, level_arg=True)[0].endswith("ms SLOW!]")
