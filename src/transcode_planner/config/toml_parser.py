"""TOML config file loading."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a config file cannot be parsed in strict mode."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        super().__init__(f"Cannot parse config file {path}: {cause}")


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into a dictionary."""
    return tomllib.loads(content)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: Raise TomlParseError instead of returning {} on failure.

    Returns:
        Parsed dictionary; empty if the file does not exist.

    Raises:
        TomlParseError: When strict is True and the file cannot be read.
    """
    if not path.exists():
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise TomlParseError(path, e) from e
        logger.warning("Failed to load TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config
