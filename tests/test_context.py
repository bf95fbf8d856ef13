"""Tests for AppContext and the process-wide state accessors."""

from pathlib import Path

import pytest

from devcontainer_mcp.config import Config, Settings
from devcontainer_mcp.context import AppContext
from devcontainer_mcp.remote import register_remote_method
from devcontainer_mcp.services import state


def test_from_config_builds_default_registries() -> None:
    config = Config(settings=Settings(output_max_chars=1000, notification_history=3))
    context = AppContext.from_config(config)

    assert "up" in context.commands
    assert "features test" in context.commands
    assert len(context.remote_methods) == 0
    assert context.output.max_chars == 1000
    assert context.dispatcher.output is context.output
    assert context.dispatcher.notifier is context.notifications


@pytest.mark.asyncio
async def test_cleanup_waits_for_running_processes(
    app_context: AppContext, project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FAKE_SLEEP", "0.2")
    register_remote_method(app_context.remote_methods, app_context.config)
    handle = await app_context.dispatcher.invoke("build", project)

    await app_context.cleanup()

    assert handle.returncode == 0
    assert app_context.dispatcher.running == []
    assert len(app_context.notifications.history) == 1
    assert len(app_context.remote_methods) == 0
    assert "up" in app_context.commands


def test_state_set_and_reset() -> None:
    context = AppContext.from_config(Config())
    state.set_context(context)
    assert state.get_context() is context

    state.reset_state()
    other = state.get_context()
    assert other is not context
    state.reset_state()
