"""Tests for the configuration module."""

import dataclasses
from pathlib import Path

import pytest

from topoviz._cli.config import (
    ConfigError,
    TopovizConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)
from topoviz._controller import DEFAULT_DELAY


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Should return None when no pyproject.toml is found."""
        result = find_pyproject_toml(tmp_path)

        assert result is None


class TestLoadConfig:
    """Tests for loading the [tool.topoviz] table."""

    def test_delay(self, tmp_path: Path) -> None:
        """Should parse a float delay."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.topoviz]
delay = 0.25
""",
        )

        config = load_config(pyproject)

        assert config.delay == 0.25
        assert config.project_root == tmp_path

    def test_integer_delay(self, tmp_path: Path) -> None:
        """Should accept an integer number of seconds."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topoviz]\ndelay = 2\n")

        config = load_config(pyproject)

        assert config.delay == 2.0
        assert isinstance(config.delay, float)

    def test_no_tool_topoviz_section(self, tmp_path: Path) -> None:
        """Should return empty config when there is no [tool.topoviz] section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == TopovizConfig(project_root=tmp_path)

    def test_empty_tool_topoviz_section(self, tmp_path: Path) -> None:
        """Should return empty config for an empty [tool.topoviz] section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topoviz]\n")

        config = load_config(pyproject)

        assert config.delay is None


class TestLoadConfigErrors:
    """Tests for invalid configuration."""

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid TOML."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topoviz\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    @pytest.mark.parametrize("value", ['"fast"', "true", "[1]"])
    def test_non_numeric_delay_raises_error(self, tmp_path: Path, value: str) -> None:
        """Should raise ConfigError when delay is not a number."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.topoviz]\ndelay = {value}\n")

        with pytest.raises(ConfigError, match="expected a number"):
            load_config(pyproject)

    def test_negative_delay_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for a negative delay."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topoviz]\ndelay = -1\n")

        with pytest.raises(ConfigError, match="must not be negative"):
            load_config(pyproject)

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        """Should raise ConfigError when tool.topoviz is not a table."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool]\ntopoviz = "fast"\n')

        with pytest.raises(ConfigError, match="expected a table"):
            load_config(pyproject)


class TestGetConfig:
    """Tests for get_config."""

    def test_reads_from_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.topoviz]\ndelay = 0.5\n")
        monkeypatch.chdir(tmp_path)

        assert get_config().delay == 0.5


class TestTopovizConfig:
    """Tests for the TopovizConfig dataclass."""

    def test_default_values(self) -> None:
        config = TopovizConfig()
        assert config.delay is None
        assert config.project_root is None

    def test_frozen(self) -> None:
        config = TopovizConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.delay = 1.0  # type: ignore[misc]

    def test_resolve_delay_precedence(self) -> None:
        assert TopovizConfig().resolve_delay() == DEFAULT_DELAY
        assert TopovizConfig(delay=0.3).resolve_delay() == 0.3
        assert TopovizConfig(delay=0.3).resolve_delay(0.0) == 0.0
