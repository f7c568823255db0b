"""Video codec alias resolution.

Probe tools and container tags name the same codec several ways
(``hevc`` from ffprobe, ``hvc1``/``hev1`` from MP4 sample entries, ``x265``
from encoder tags). Matching goes through these alias groups.
"""

from __future__ import annotations

VIDEO_CODEC_ALIASES: dict[str, frozenset[str]] = {
    "hevc": frozenset({"hevc", "h265", "h.265", "x265", "hvc1", "hev1"}),
    "h265": frozenset({"hevc", "h265", "h.265", "x265", "hvc1", "hev1"}),
    "h264": frozenset({"h264", "h.264", "avc", "avc1", "x264"}),
    "avc": frozenset({"h264", "h.264", "avc", "avc1", "x264"}),
    "vp9": frozenset({"vp9", "vp09"}),
    "av1": frozenset({"av1", "av01", "libaom-av1"}),
    "mpeg4": frozenset({"mpeg4", "mp4v"}),
}


def normalize_codec(codec: str | None) -> str:
    """Lowercase and strip a codec identifier; None becomes an empty string."""
    if not codec:
        return ""
    return codec.strip().casefold()


def video_codec_matches(current: str | None, target: str) -> bool:
    """Check whether a probed codec is the same codec as the target.

    Args:
        current: Codec name reported by the prober (may be None).
        target: Target codec name (e.g., "hevc").

    Returns:
        True if both names fall in the same alias group, or are equal when
        the target has no alias group.
    """
    current_norm = normalize_codec(current)
    target_norm = normalize_codec(target)
    if not current_norm or not target_norm:
        return False
    aliases = VIDEO_CODEC_ALIASES.get(target_norm)
    if aliases is None:
        return current_norm == target_norm
    return current_norm in aliases
