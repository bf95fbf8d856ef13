"""Tests for the notification log."""

import logging

import pytest

from devcontainer_mcp.protocols import Notifier
from devcontainer_mcp.services import NotificationLog


def test_success_and_failure_recorded() -> None:
    log = NotificationLog()
    log.success("devcontainer up succeeded", "up")
    log.failure("devcontainer build failed: exited abnormally with code 1", "build")

    levels = [(n.level, n.subcommand, n.is_failure) for n in log.history]
    assert levels == [("info", "up", False), ("error", "build", True)]


def test_history_is_bounded() -> None:
    log = NotificationLog(history=2)
    for i in range(5):
        log.success(f"run {i}")

    assert [n.message for n in log.history] == ["run 3", "run 4"]
    assert [n.message for n in log.recent(1)] == ["run 4"]
    assert log.recent(0) == []


def test_failure_logged_at_error(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("devcontainer_mcp"), "propagate", True)
    caplog.set_level(logging.INFO, logger="devcontainer_mcp.services.notify")

    NotificationLog().failure("devcontainer up failed")

    assert caplog.records[-1].levelno == logging.ERROR


def test_satisfies_notifier_protocol() -> None:
    assert isinstance(NotificationLog(), Notifier)
