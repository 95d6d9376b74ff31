"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pibound.reference import DEFAULT_PRECISION
from pibound.series import Order


class ConfigError(Exception):
    """Error in pibound configuration."""


@dataclass(slots=True, frozen=True)
class PiboundConfig:
    """Configuration loaded from the [tool.pibound] table of pyproject.toml.

    Keys missing from the table keep their defaults. `sizes` lists the numbers of
    terms or cells tabulated by ``pibound study``.
    """

    terms: int = 1_000_000
    order: Order = Order.REVERSE
    cells: int = 100
    radius: int = 2
    precision: int = DEFAULT_PRECISION
    sizes: tuple[int, ...] = (10, 20, 40, 80, 160, 320)
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from `start_dir`.

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
            return None
        current = parent


def _positive_int(section: dict[str, Any], key: str) -> int:
    value = section[key]

    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"Invalid [tool.pibound].{key}: expected positive integer"
        raise ConfigError(msg)

    return value


def load_config(pyproject_path: Path) -> PiboundConfig:
    """Load and validate [tool.pibound] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed PiboundConfig

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

    section = data.get("tool", {}).get("pibound", {})

    if not isinstance(section, dict):
        msg = "Invalid [tool.pibound]: expected a table"
        raise ConfigError(msg)

    unknown = set(section) - {"terms", "order", "cells", "radius", "precision", "sizes"}
    if unknown:
        msg = f"Unknown [tool.pibound] keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    options: dict[str, Any] = {}

    for key in ("terms", "cells", "radius", "precision"):
        if key in section:
            options[key] = _positive_int(section, key)

    if "order" in section:
        try:
            options["order"] = Order(section["order"])
        except ValueError as e:
            msg = "Invalid [tool.pibound].order: expected 'forward' or 'reverse'"
            raise ConfigError(msg) from e

    if "sizes" in section:
        sizes = section["sizes"]
        if (
            not isinstance(sizes, list)
            or len(sizes) < 2
            or not all(type(n) is int and n > 0 for n in sizes)
        ):
            msg = "Invalid [tool.pibound].sizes: expected >= 2 positive integers"
            raise ConfigError(msg)
        options["sizes"] = tuple(sizes)

    return PiboundConfig(**options, project_root=project_root)


def get_config() -> PiboundConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        PiboundConfig (defaults if no pyproject.toml or no [tool.pibound] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return PiboundConfig()

    return load_config(pyproject_path)
