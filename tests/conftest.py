"""Shared fixtures: a fake devcontainer CLI and an isolated app context."""

import stat
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from devcontainer_mcp.config import Config, Settings
from devcontainer_mcp.context import AppContext
from devcontainer_mcp.services.state import reset_state, set_context

# Echoes its argv and working directory, writes to stderr, and exits with
# $FAKE_EXIT (default 0) after sleeping $FAKE_SLEEP seconds.
FAKE_DEVCONTAINER = """#!/bin/sh
echo "args: $*"
echo "cwd: $(pwd)"
echo "to stderr" >&2
if [ -n "$FAKE_SLEEP" ]; then
    sleep "$FAKE_SLEEP"
fi
exit "${FAKE_EXIT:-0}"
"""


def _write_script(path: Path, body: str) -> Path:
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing an executable shell script into tmp_path."""

    def make(name: str, body: str) -> Path:
        return _write_script(tmp_path / name, body)

    return make


@pytest.fixture
def fake_devcontainer(tmp_path: Path) -> Path:
    """Executable standing in for the devcontainer CLI."""
    return _write_script(tmp_path / "devcontainer", FAKE_DEVCONTAINER)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project directory with a .devcontainer folder and a nested subdir."""
    root = tmp_path / "project"
    (root / ".devcontainer").mkdir(parents=True)
    (root / ".devcontainer" / "devcontainer.json").write_text("{}")
    (root / "src" / "pkg").mkdir(parents=True)
    return root


@pytest.fixture
def config(fake_devcontainer: Path, tmp_path: Path) -> Config:
    return Config(
        settings=Settings(
            devcontainer_path=str(fake_devcontainer),
            runtime_path=str(tmp_path / "no-such-runtime"),
        )
    )


@pytest.fixture
def app_context(config: Config) -> Iterator[AppContext]:
    """AppContext installed as the process-wide context for tools and resources."""
    context = AppContext.from_config(config)
    set_context(context)
    yield context
    reset_state()
