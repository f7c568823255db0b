"""Logging configuration from the global CLI options."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from transcode_planner.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return base with the given CLI overrides applied.

    Options left as None keep the configured value. Rotation settings are
    only configurable in the config file.

    Raises:
        ValueError: If an override is not a valid level or format.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})
