"""Tests for project root resolution."""

from pathlib import Path

import pytest

from devcontainer_mcp.services import NoProjectError, find_project_root, resolve_workspace


def test_finds_devcontainer_folder(project: Path) -> None:
    assert find_project_root(project / "src" / "pkg") == project.resolve()


def test_devcontainer_json_file_marks_root(tmp_path: Path) -> None:
    (tmp_path / "app" / "lib").mkdir(parents=True)
    (tmp_path / "app" / ".devcontainer.json").write_text("{}")

    assert find_project_root(tmp_path / "app" / "lib") == (tmp_path / "app").resolve()


def test_devcontainer_beats_enclosing_vcs_root(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    service = tmp_path / "services" / "api"
    (service / ".devcontainer").mkdir(parents=True)

    assert find_project_root(service) == service.resolve()


def test_vcs_root_used_without_devcontainer(tmp_path: Path) -> None:
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    (tmp_path / "repo" / "docs").mkdir()

    assert find_project_root(tmp_path / "repo" / "docs") == (tmp_path / "repo").resolve()


def test_file_start_uses_parent(project: Path) -> None:
    source = project / "src" / "pkg" / "mod.py"
    source.write_text("")
    assert find_project_root(source) == project.resolve()


def test_missing_path_has_no_root(tmp_path: Path) -> None:
    assert find_project_root(tmp_path / "does" / "not" / "exist") is None


def test_resolve_workspace_raises(tmp_path: Path) -> None:
    lonely = tmp_path / "lonely"
    lonely.mkdir()

    with pytest.raises(NoProjectError, match="No active project"):
        resolve_workspace(lonely)
