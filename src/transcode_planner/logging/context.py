"""Per-file run context for structured logging.

A pipeline run for one file sets run_id and file_path in contextvars, and
FileContextFilter copies them onto every record emitted meanwhile.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


@contextmanager
def file_context(
    run_id: str,
    file_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Bind a run id and file path to log records inside the block.

    The previous context is restored on exit, so blocks can nest.

    Example:
        with file_context("F001", "/media/movie.mkv"):
            logger.info("Planning")  # tagged [F:F001]
    """
    run_token = _run_id.set(run_id)
    path_token = _file_path.set(str(file_path) if file_path is not None else None)
    try:
        yield
    finally:
        _file_path.reset(path_token)
        _run_id.reset(run_token)


def get_file_context() -> tuple[str | None, str | None]:
    """Return (run_id, file_path) for the current context; either may be None."""
    return _run_id.get(), _file_path.get()


class FileContextFilter(logging.Filter):
    """Logging filter that injects the per-file run context.

    Adds run_id and file_path attributes for JSON output, and a compact
    file_tag such as ``[F:F001] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        run_id, file_path = get_file_context()
        record.run_id = run_id
        record.file_path = file_path
        record.file_tag = f"[F:{run_id}] " if run_id else ""
        return True
