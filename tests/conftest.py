"""Shared test fixtures for Transcode Planner."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any

import pytest

from transcode_planner.domain.models import MediaProbe


def _make_ffprobe_doc(
    codec: str = "h264",
    width: int = 1920,
    height: int = 1080,
    duration: str | None = "3600.000000",
    size: str | None = "4000000000",
    color_primaries: str | None = None,
    color_transfer: str | None = None,
    color_space: str | None = None,
    include_video: bool = True,
) -> dict[str, Any]:
    """Build an ffprobe -show_streams -show_format style document."""
    streams: list[dict[str, Any]] = []
    if include_video:
        video: dict[str, Any] = {
            "index": 0,
            "codec_type": "video",
            "codec_name": codec,
            "width": width,
            "height": height,
        }
        if color_primaries is not None:
            video["color_primaries"] = color_primaries
        if color_transfer is not None:
            video["color_transfer"] = color_transfer
        if color_space is not None:
            video["color_space"] = color_space
        streams.append(video)
    streams.append(
        {"index": len(streams), "codec_type": "audio", "codec_name": "aac"}
    )

    format_info: dict[str, Any] = {"format_name": "matroska,webm"}
    if duration is not None:
        format_info["duration"] = duration
    if size is not None:
        format_info["size"] = size
    return {"streams": streams, "format": format_info}


def _make_probe(**overrides: Any) -> MediaProbe:
    """Build a 1080p h264 MediaProbe, one hour long, 4 GB."""
    values: dict[str, Any] = {
        "has_video": True,
        "codec": "h264",
        "width": 1920,
        "height": 1080,
        "duration_seconds": 3600.0,
        "file_size_bytes": 4_000_000_000,
    }
    values.update(overrides)
    return MediaProbe(**values)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def ffprobe_doc() -> dict[str, Any]:
    """Return a 1080p h264 ffprobe document."""
    return _make_ffprobe_doc()


@pytest.fixture
def hdr_ffprobe_doc() -> dict[str, Any]:
    """Return a 2160p HDR10 h264 ffprobe document."""
    return _make_ffprobe_doc(
        width=3840,
        height=2160,
        color_primaries="bt2020",
        color_transfer="smpte2084",
        color_space="bt2020nc",
    )


@pytest.fixture
def write_probe_json(temp_dir: Path):
    """Return a helper that saves an ffprobe document as JSON."""

    def _write(name: str, doc: dict[str, Any]) -> Path:
        path = temp_dir / name
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_ffprobe_doc():
    """Return the ffprobe document factory."""
    return _make_ffprobe_doc


@pytest.fixture
def make_probe():
    """Return the MediaProbe factory."""
    return _make_probe
