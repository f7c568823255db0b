"""Pure parsing functions for ffprobe JSON output.

These functions turn a raw probe document into a MediaProbe.
All functions are pure (no I/O, no side effects) for easy testing.
"""

import logging
import math
from typing import Any

from transcode_planner.domain.models import MediaProbe
from transcode_planner.policy.exceptions import InvalidProbeError, NoVideoStreamError

logger = logging.getLogger(__name__)


def parse_number(value: Any) -> float | None:
    """Parse a numeric ffprobe field that may arrive as string or number.

    Args:
        value: Raw value (e.g., "3600.000", 3600, None).

    Returns:
        The value as a finite float, or None if it cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(number):
        return None
    return number


def find_video_stream(streams: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Return the first stream whose codec_type is video, if any."""
    for stream in streams:
        if stream.get("codec_type") == "video":
            return stream
    return None


def _parse_dimension(stream: dict[str, Any], key: str) -> int:
    raw = stream.get(key)
    value = parse_number(raw)
    if value is None or value <= 0:
        raise InvalidProbeError(key, raw)
    return int(value)


def _optional_tag(stream: dict[str, Any], key: str) -> str | None:
    value = stream.get(key)
    if value is None:
        return None
    value = str(value).strip()
    # ffprobe reports "unknown" for untagged color properties
    if not value or value == "unknown":
        return None
    return value


def analyze_probe(
    raw: dict[str, Any],
    file_size_bytes: int | None = None,
    file_path: str | None = None,
) -> MediaProbe:
    """Extract the facts needed for planning from a raw probe document.

    Args:
        raw: ffprobe JSON output with ``streams`` and ``format``.
        file_size_bytes: File size from the caller. Used when the probe
            document has no ``format.size``.
        file_path: Path for error messages and log context.

    Returns:
        Normalized MediaProbe for the first video stream.

    Raises:
        NoVideoStreamError: If no stream of type video is present.
        InvalidProbeError: If duration or size is missing or not positive,
            or a frame dimension is missing or not positive.
    """
    streams = raw.get("streams") or []
    format_info = raw.get("format") or {}

    video = find_video_stream(streams)
    if video is None:
        raise NoVideoStreamError(file_path)

    raw_duration = format_info.get("duration")
    duration = parse_number(raw_duration)
    if duration is None:
        # Some containers only carry duration on the stream
        raw_duration = video.get("duration", raw_duration)
        duration = parse_number(raw_duration)
    if duration is None or duration <= 0:
        raise InvalidProbeError("duration_seconds", raw_duration)

    raw_size = format_info.get("size")
    size = parse_number(raw_size)
    if size is None and file_size_bytes is not None:
        raw_size = file_size_bytes
        size = float(file_size_bytes)
    if size is None or size < 0:
        raise InvalidProbeError("file_size_bytes", raw_size)

    probe = MediaProbe(
        has_video=True,
        codec=_optional_tag(video, "codec_name"),
        width=_parse_dimension(video, "width"),
        height=_parse_dimension(video, "height"),
        duration_seconds=duration,
        file_size_bytes=int(size),
        color_primaries=_optional_tag(video, "color_primaries"),
        color_transfer=_optional_tag(video, "color_transfer"),
        color_space=_optional_tag(video, "color_space"),
    )
    logger.debug(
        "Analyzed probe%s: codec=%s %dx%d duration=%.3fs size=%d",
        f" for {file_path}" if file_path else "",
        probe.codec,
        probe.width,
        probe.height,
        probe.duration_seconds,
        probe.file_size_bytes,
    )
    return probe
