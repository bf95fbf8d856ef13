"""Tests for the asynchronous devcontainer dispatcher."""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from devcontainer_mcp.commands import CommandRegistry, PromptError, SuppliedValuePrompter
from devcontainer_mcp.config import Config, Settings
from devcontainer_mcp.models import ProcessState
from devcontainer_mcp.services import (
    Dispatcher,
    NoProjectError,
    NotificationLog,
    OutputBuffer,
    build_argv,
)


@pytest.fixture
def output() -> OutputBuffer:
    return OutputBuffer()


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def dispatcher(config: Config, output: OutputBuffer, notifier: MagicMock) -> Dispatcher:
    return Dispatcher(config, output, notifier)


def test_build_argv_order() -> None:
    assert build_argv("features test", "/ws", ["-f", "x"]) == [
        "--workspace-folder",
        "/ws",
        "features",
        "test",
        "-f",
        "x",
    ]


@pytest.mark.asyncio
async def test_invoke_returns_before_exit(
    dispatcher: Dispatcher, project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FAKE_SLEEP", "0.3")

    handle = await dispatcher.invoke("up", project)

    assert handle.state is ProcessState.RUNNING
    assert handle.pid is not None
    assert dispatcher.running == [handle]

    await handle.wait()
    assert dispatcher.running == []


@pytest.mark.asyncio
async def test_success_notifies_once(
    dispatcher: Dispatcher, output: OutputBuffer, notifier: MagicMock, project: Path
) -> None:
    handle = await dispatcher.invoke("up", project / "src" / "pkg")
    await handle.wait()

    assert handle.workspace == project.resolve()
    assert handle.returncode == 0
    assert handle.state is ProcessState.SUCCEEDED
    notifier.success.assert_called_once_with("devcontainer up succeeded", "up")
    notifier.failure.assert_not_called()

    text = output.text
    assert f"args: --workspace-folder {project.resolve()} up" in text
    assert f"cwd: {project.resolve()}" in text
    assert "to stderr" in text
    assert text.rstrip().endswith("[devcontainer up] finished")


@pytest.mark.asyncio
async def test_failure_notifies_once(
    dispatcher: Dispatcher,
    output: OutputBuffer,
    notifier: MagicMock,
    project: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("FAKE_EXIT", "3")

    handle = await dispatcher.invoke("build", project)
    await handle.wait()

    assert handle.state is ProcessState.FAILED
    assert handle.status == "exited abnormally with code 3"
    notifier.success.assert_not_called()
    notifier.failure.assert_called_once()
    message, subcommand = notifier.failure.call_args.args
    assert subcommand == "build"
    assert "devcontainer build failed: exited abnormally with code 3" in message
    assert output.name in message


@pytest.mark.asyncio
async def test_killed_by_signal(
    output: OutputBuffer,
    notifier: MagicMock,
    project: Path,
    make_script: Callable[[str, str], Path],
) -> None:
    script = make_script("devcontainer-killed", "#!/bin/sh\nkill -TERM $$\n")
    config = Config(settings=Settings(devcontainer_path=str(script)))
    dispatcher = Dispatcher(config, output, notifier)

    handle = await dispatcher.invoke("up", project)
    await handle.wait()

    assert handle.status == "killed by SIGTERM"
    notifier.failure.assert_called_once()
    message, subcommand = notifier.failure.call_args.args
    assert subcommand == "up"
    assert "devcontainer up failed: killed by SIGTERM" in message


@pytest.mark.asyncio
async def test_launch_failure_takes_failure_path(
    output: OutputBuffer, notifier: MagicMock, project: Path, tmp_path: Path
) -> None:
    config = Config(settings=Settings(devcontainer_path=str(tmp_path / "missing")))
    dispatcher = Dispatcher(config, output, notifier)

    handle = await dispatcher.invoke("up", project)
    assert handle.pid is None
    await handle.wait()

    assert handle.state is ProcessState.FAILED
    assert handle.status.startswith("failed to start")
    notifier.failure.assert_called_once()
    notifier.success.assert_not_called()
    assert dispatcher.running == []


@pytest.mark.asyncio
async def test_no_project_spawns_nothing(
    dispatcher: Dispatcher, output: OutputBuffer, notifier: MagicMock, tmp_path: Path
) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()

    with pytest.raises(NoProjectError, match="No active project"):
        await dispatcher.invoke("up", outside)

    assert output.text == ""
    assert dispatcher.running == []
    notifier.success.assert_not_called()
    notifier.failure.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_runs_share_buffer(
    config: Config,
    project: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("FAKE_SLEEP", "0.2")
    output = OutputBuffer()
    notifications = NotificationLog()
    dispatcher = Dispatcher(config, output, notifications)

    up = await dispatcher.invoke("up", project)
    build = await dispatcher.invoke("build", project)
    assert len(dispatcher.running) == 2

    await asyncio.gather(up.wait(), build.wait())

    text = output.text
    assert f"args: --workspace-folder {up.workspace} up\n" in text
    assert f"args: --workspace-folder {build.workspace} build\n" in text
    assert "[devcontainer up] finished" in text
    assert "[devcontainer build] finished" in text
    assert sorted((n.subcommand, n.message) for n in notifications.history) == [
        ("build", "devcontainer build succeeded"),
        ("up", "devcontainer up succeeded"),
    ]


@pytest.mark.asyncio
async def test_overlap_logs_warning(
    dispatcher: Dispatcher,
    project: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("FAKE_SLEEP", "0.2")
    caplog.set_level("WARNING", logger="devcontainer_mcp.services.dispatcher")
    monkeypatch.setattr(logging.getLogger("devcontainer_mcp"), "propagate", True)

    first = await dispatcher.invoke("build", project)
    second = await dispatcher.invoke("build", project)
    await dispatcher.wait_all()

    assert first.returncode == second.returncode == 0
    assert "already running" in caplog.text


@pytest.mark.asyncio
async def test_run_prompts_and_appends_args(
    dispatcher: Dispatcher, output: OutputBuffer, project: Path
) -> None:
    descriptor = CommandRegistry.default().get("exec")
    prompter = SuppliedValuePrompter({"command": "make 'unit tests'"})

    handle = await dispatcher.run(descriptor, project, prompter)
    await handle.wait()

    assert handle.argv[-3:] == ["exec", "make", "unit tests"]
    assert f"args: --workspace-folder {project.resolve()} exec make unit tests" in output.text


@pytest.mark.asyncio
async def test_run_rejects_before_spawn_on_bad_prompt(
    dispatcher: Dispatcher, output: OutputBuffer, project: Path
) -> None:
    descriptor = CommandRegistry.default().get("templates apply")

    with pytest.raises(PromptError):
        await dispatcher.run(descriptor, project, SuppliedValuePrompter())

    assert output.text == ""
    assert dispatcher.running == []


@pytest.mark.asyncio
async def test_run_checks_project_before_prompting(
    dispatcher: Dispatcher, tmp_path: Path
) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    prompter = MagicMock()

    with pytest.raises(NoProjectError):
        await dispatcher.run(CommandRegistry.default().get("exec"), outside, prompter)

    prompter.read_shell_command.assert_not_called()
