"""Structured logging module for Transcode Planner.

Provides configurable logging with JSON format support, file rotation and
per-file run context.
"""

from transcode_planner.logging.config import configure_logging
from transcode_planner.logging.context import (
    FileContextFilter,
    file_context,
    get_file_context,
)
from transcode_planner.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "FileContextFilter",
    "configure_logging",
    "file_context",
    "get_file_context",
]
