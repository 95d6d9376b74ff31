"""Tests for the configuration module."""

from pathlib import Path

import pytest

from pibound.config import (
    ConfigError,
    PiboundConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)
from pibound.series import Order


def _write(tmp_path: Path, text: str) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(text)
    return pyproject


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = _write(tmp_path, "[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = _write(tmp_path, "[project]\nname = 'test'\n")
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_section_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to defaults without a [tool.pibound] table."""
        config = load_config(_write(tmp_path, "[project]\nname = 'test'\n"))

        assert config == PiboundConfig(project_root=tmp_path)

    def test_all_keys(self, tmp_path: Path) -> None:
        """Should parse every supported key."""
        pyproject = _write(
            tmp_path,
            """
[tool.pibound]
terms = 1000
order = "forward"
cells = 20
radius = 1
precision = 128
sizes = [5, 10, 15]
""",
        )

        config = load_config(pyproject)

        assert config.terms == 1000
        assert config.order is Order.FORWARD
        assert config.cells == 20
        assert config.radius == 1
        assert config.precision == 128
        assert config.sizes == (5, 10, 15)
        assert config.project_root == tmp_path

    @pytest.mark.parametrize(
        ("body", "match"),
        [
            ("terms = 0", "terms"),
            ("cells = -3", "cells"),
            ("radius = 1.5", "radius"),
            ("precision = true", "precision"),
            ('order = "sideways"', "order"),
            ("sizes = [10]", "sizes"),
            ("sizes = [10, 0]", "sizes"),
            ('sizes = "10"', "sizes"),
            ("colour = 'red'", "Unknown"),
        ],
    )
    def test_invalid_values_raise_error(
        self, tmp_path: Path, body: str, match: str
    ) -> None:
        """Should raise ConfigError for invalid values."""
        pyproject = _write(tmp_path, f"[tool.pibound]\n{body}\n")

        with pytest.raises(ConfigError, match=match):
            load_config(pyproject)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed TOML."""
        pyproject = _write(tmp_path, "[tool.pibound\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_non_table_section_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError if tool.pibound is not a table."""
        pyproject = _write(tmp_path, "[tool]\npibound = 3\n")

        with pytest.raises(ConfigError, match="expected a table"):
            load_config(pyproject)


class TestGetConfig:
    """Tests for get_config function."""

    def test_defaults_without_pyproject(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should return defaults when no pyproject.toml exists."""
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config == PiboundConfig()
        assert config.project_root is None

    def test_reads_from_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should read pyproject.toml from the working directory."""
        _write(tmp_path, "[tool.pibound]\ncells = 7\n")
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.cells == 7
        assert config.project_root == tmp_path.resolve()
