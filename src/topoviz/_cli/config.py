"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from topoviz._controller import DEFAULT_DELAY


class ConfigError(Exception):
    """Error in topoviz configuration."""


@dataclass(slots=True, frozen=True)
class TopovizConfig:
    """Configuration loaded from the ``[tool.topoviz]`` table of pyproject.toml."""

    delay: float | None = None
    project_root: Path | None = None

    def resolve_delay(self, override: float | None = None) -> float:
        """Pick the animation delay: explicit override, then config, then default."""
        if override is not None:
            return override
        if self.delay is not None:
            return self.delay
        return DEFAULT_DELAY


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_delay(value: object) -> float:
    # bool is an int subclass but never a meaningful delay
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = "Invalid [tool.topoviz].delay: expected a number of seconds"
        raise ConfigError(msg)
    if value < 0:
        msg = f"Invalid [tool.topoviz].delay: must not be negative (got {value})"
        raise ConfigError(msg)
    return float(value)


def load_config(pyproject_path: Path) -> TopovizConfig:
    """Load and validate [tool.topoviz] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TopovizConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("topoviz", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.topoviz] configuration: expected a table"
        raise ConfigError(msg)

    delay: float | None = None
    if "delay" in section:
        delay = _parse_delay(section["delay"])

    return TopovizConfig(delay=delay, project_root=project_root)


def get_config() -> TopovizConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TopovizConfig (may be empty if no pyproject.toml or no [tool.topoviz] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TopovizConfig()
    return load_config(pyproject_path)
