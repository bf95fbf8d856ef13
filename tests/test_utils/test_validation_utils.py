"""Tests for container name and path validation."""

import pytest

from devcontainer_mcp.utils.validation import validate_container, validate_path


class TestValidateContainer:
    """Test container name validation."""

    @pytest.mark.parametrize(
        "name",
        ["web", "app_devcontainer-app-1", "3f2a9c1b7d4e", "vsc-project.1"],
    )
    def test_accepts_names_and_ids(self, name: str) -> None:
        assert validate_container(name) == name

    def test_strips_whitespace(self) -> None:
        assert validate_container("  web \n") == "web"

    @pytest.mark.parametrize("name", ["", "   ", "-web", ".hidden", "a b", "web;ls", "w/x"])
    def test_rejects_invalid(self, name: str) -> None:
        with pytest.raises(ValueError):
            validate_container(name)

    def test_rejects_overlong(self) -> None:
        with pytest.raises(ValueError, match="too long"):
            validate_container("a" * 254)


class TestValidatePath:
    """Test in-container path validation."""

    def test_relative_anchored_at_root(self) -> None:
        assert validate_path("etc/hosts") == "/etc/hosts"

    def test_normalized(self) -> None:
        assert validate_path("/var/log/../lib//x") == "/var/lib/x"

    def test_home_kept(self) -> None:
        assert validate_path("~/.bashrc") == "~/.bashrc"

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            validate_path("")

    def test_rejects_null_byte(self) -> None:
        with pytest.raises(ValueError, match="null byte"):
            validate_path("/etc/passwd\x00.txt")
