"""Tests for the remote method registry."""

from collections.abc import Callable
from pathlib import Path

import pytest

from devcontainer_mcp.config import Config, Settings
from devcontainer_mcp.models import OWN_REMOTE_PATH, RemoteMethod
from devcontainer_mcp.remote import (
    RemoteMethodRegistry,
    UnknownMethodError,
    devcontainer_method,
    register_remote_method,
)
from devcontainer_mcp.remote.registry import DEFAULT_REMOTE_PATH


def test_devcontainer_method_shape() -> None:
    config = Config(settings=Settings(devcontainer_path="/usr/bin/devcontainer"))
    method = devcontainer_method(config)

    assert method.name == "devcontainer"
    assert method.login_program == "/usr/bin/devcontainer"
    assert method.login_args == (
        "exec",
        "--workspace-folder",
        ".",
        "--container-id",
        "%h",
        "%l",
    )
    assert method.remote_shell == "/bin/sh"
    assert method.remote_shell_login == ("-l",)
    assert method.remote_shell_args == ("-i", "-c")


def test_registration_is_idempotent() -> None:
    registry = RemoteMethodRegistry()
    other = RemoteMethod("ssh", "ssh", ("%h",))
    registry.register(other)
    config = Config(settings=Settings(devcontainer_path="devcontainer"))

    register_remote_method(registry, config)
    register_remote_method(registry, config)

    assert len(registry) == 2
    assert registry.get("ssh") is other
    assert registry.remote_path.count(OWN_REMOTE_PATH) == 1
    assert registry.remote_path[: len(DEFAULT_REMOTE_PATH)] == list(DEFAULT_REMOTE_PATH)
    assert registry.remote_path[-1] == OWN_REMOTE_PATH


def test_get_unknown_method() -> None:
    with pytest.raises(UnknownMethodError, match="Unknown remote method 'nope'"):
        RemoteMethodRegistry().get("nope")


@pytest.mark.asyncio
async def test_candidates_use_runtime(
    make_script: Callable[[str, str], Path],
) -> None:
    runtime = make_script("podman", "#!/bin/sh\nprintf 'web\\ndb\\n'\n")
    config = Config(
        settings=Settings(devcontainer_path="devcontainer", runtime_path=str(runtime))
    )
    registry = RemoteMethodRegistry()
    register_remote_method(registry, config)

    assert await registry.candidates("devcontainer") == ["web", "db"]


@pytest.mark.asyncio
async def test_candidates_without_completion() -> None:
    registry = RemoteMethodRegistry()
    registry.register(RemoteMethod("plain", "sh", ()))
    assert await registry.candidates("plain") == []

    with pytest.raises(UnknownMethodError):
        await registry.candidates("missing")


def test_clear_resets_remote_path() -> None:
    registry = RemoteMethodRegistry()
    register_remote_method(registry, Config(settings=Settings(devcontainer_path="dc")))

    registry.clear()

    assert len(registry) == 0
    assert registry.remote_path == list(DEFAULT_REMOTE_PATH)
