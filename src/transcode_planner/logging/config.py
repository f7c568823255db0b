"""Root logger setup for tplan.

configure_logging() is called once by the CLI after configuration has been
resolved. Library code only ever uses module-level loggers.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from transcode_planner.logging.context import FileContextFilter
from transcode_planner.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from transcode_planner.config.models import LoggingConfig

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# file_tag is "[F:F001] " inside a pipeline run, empty otherwise
TEXT_FORMAT = "%(asctime)s - %(file_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Rotating handler for config.file, or None if it cannot be opened."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        # Logging is not up yet, so report directly
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Records go to a rotating log file when one is configured and can be
    opened, and to stderr when no file is in use or include_stderr is set.
    Every handler carries the per-file run context filter.

    Args:
        config: Resolved logging configuration.
    """
    level = LOG_LEVELS.get(config.level.casefold(), logging.INFO)
    formatter = _build_formatter(config.format)
    context_filter = FileContextFilter()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)
