"""Typed access to TPLAN_* environment variables.

EnvReader wraps a mapping (os.environ by default) so configuration code can be
tested with a plain dict.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BOOL_WORDS: dict[str, bool] = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


def _parse_bool(raw: str) -> bool:
    try:
        return _BOOL_WORDS[raw.strip().lower()]
    except KeyError:
        raise ValueError(raw) from None


class EnvReader:
    """Environment variable reader with type conversion.

    A variable that is set but cannot be converted is logged at warning
    level and treated as unset.

    Example:
        reader = EnvReader(env={"TPLAN_USE_GPU": "no"})
        reader.get_bool("TPLAN_USE_GPU", True)  # False
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _convert(
        self,
        var: str,
        default: T | None,
        convert: Callable[[str], T],
        kind: str,
    ) -> T | None:
        raw = self._env.get(var)
        if raw is None:
            return default
        try:
            return convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", var, raw, kind)
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        return self._convert(var, default, int, "integer")

    def get_float(self, var: str, default: float | None = None) -> float | None:
        return self._convert(var, default, float, "number")

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Read a boolean; accepts true/1/yes/on and false/0/no/off."""
        return self._convert(var, default, _parse_bool, "boolean")

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Read a path with ``~`` expanded.

        Args:
            var: Environment variable name.
            must_exist: Treat a path that does not exist as unset.
            default: Value when unset or rejected.
        """
        raw = self._env.get(var)
        if raw is None:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning("Ignoring %s=%r: path does not exist", var, raw)
            return default
        return path
