"""Prober that serves probe documents loaded ahead of time."""

import json
from pathlib import Path
from typing import Any

from transcode_planner.introspector.interface import MediaProbeError


class StaticProber:
    """MediaProber backed by in-memory documents keyed by path.

    Used when probe JSON was captured separately (``tplan plan --probe-json``)
    and in tests.
    """

    def __init__(self, documents: dict[Path, dict[str, Any]] | None = None) -> None:
        self._documents: dict[Path, dict[str, Any]] = dict(documents or {})

    @classmethod
    def from_json_file(cls, media_path: Path, json_path: Path) -> "StaticProber":
        """Build a prober that answers for media_path with a saved JSON file."""
        try:
            data = json.loads(json_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MediaProbeError(f"Cannot read probe JSON {json_path}: {e}") from e
        if not isinstance(data, dict):
            raise MediaProbeError(f"Probe JSON {json_path} is not an object")
        return cls({media_path: data})

    def probe(self, path: Path) -> dict[str, Any]:
        try:
            return self._documents[path]
        except KeyError:
            raise MediaProbeError(f"No probe data for {path}") from None
