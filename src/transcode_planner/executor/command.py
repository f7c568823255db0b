"""FFmpeg argv construction from an EncodePlan.

This is the executor-side translation of a plan into concrete encoder
invocations. Every command is an argv list; no shell string is built.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from transcode_planner.domain.enums import EncoderFamily
from transcode_planner.domain.models import EncodePlan

logger = logging.getLogger(__name__)

# NVENC preset matching the slow x265 presets in quality
NVENC_PRESET = "p6"

# Pixel formats that carry the 10-bit main10 profile
MAIN10_PIX_FMT: dict[EncoderFamily, str] = {
    EncoderFamily.SOFTWARE_X265: "yuv420p10le",
    EncoderFamily.NVENC_HEVC: "p010le",
}

FAST_START_CONTAINERS = frozenset({"mp4", "m4v", "mov"})


def output_suffix(plan: EncodePlan) -> str:
    """File suffix for the plan's container, e.g. '.mp4'."""
    return f".{plan.container.lstrip('.')}"


def default_stats_file(output_path: Path) -> Path:
    """x265 two-pass statistics file placed next to the output."""
    return output_path.with_name(f"{output_path.stem}.x265-stats.log")


def build_quality_args(
    plan: EncodePlan,
    current_pass: int | None = None,
    stats_file: Path | None = None,
) -> list[str]:
    """Build encoder-specific quality arguments.

    Args:
        plan: Encode plan.
        current_pass: 1 or 2 for two-pass software encodes, else None.
        stats_file: x265 statistics file used by both passes.

    Returns:
        List of FFmpeg arguments for the video encoder.
    """
    family = plan.encoder.family
    quality = str(plan.quality_param)
    args: list[str] = ["-c:v", plan.encoder.encoder]

    if family is EncoderFamily.NVENC_HEVC:
        args.extend(["-preset", NVENC_PRESET, "-rc", "vbr", "-cq", quality])
    elif family is EncoderFamily.QSV_HEVC:
        args.extend(["-preset", plan.speed_preset.value, "-global_quality", quality])
    else:
        args.extend(["-preset", plan.speed_preset.value, "-crf", quality])
        if current_pass is not None and stats_file is not None:
            # x265 uses x265-params pass=1/2:stats=file
            args.extend(["-x265-params", f"pass={current_pass}:stats={stats_file}"])

    if plan.profile:
        args.extend(["-profile:v", plan.profile])
        pix_fmt = MAIN10_PIX_FMT.get(family)
        if pix_fmt:
            args.extend(["-pix_fmt", pix_fmt])

    return args


def build_hdr_args(plan: EncodePlan) -> list[str]:
    """Color metadata arguments for HDR passthrough, or an empty list."""
    hdr = plan.hdr_passthrough
    if hdr is None:
        return []
    return [
        "-color_primaries",
        hdr.primaries,
        "-color_trc",
        hdr.transfer,
        "-colorspace",
        hdr.space,
    ]


def build_stream_args(plan: EncodePlan) -> list[str]:
    """Stream mapping, copy and container arguments."""
    args: list[str] = []
    if plan.map_all_streams:
        args.extend(["-map", "0"])
    if plan.copy_audio:
        args.extend(["-c:a", "copy"])
    if plan.copy_subtitles:
        args.extend(["-c:s", "copy"])
    if plan.fast_start and plan.container.lstrip(".").lower() in FAST_START_CONTAINERS:
        args.extend(["-movflags", "+faststart"])
    args.extend(["-avoid_negative_ts", "make_zero"])
    return args


def build_ffmpeg_commands(
    plan: EncodePlan,
    input_path: Path,
    output_path: Path,
    ffmpeg_path: Path | str = "ffmpeg",
    stats_file: Path | None = None,
) -> list[list[str]]:
    """Translate a plan into one argv per encoder pass.

    Args:
        plan: Encode plan.
        input_path: Source media file.
        output_path: Destination file.
        ffmpeg_path: ffmpeg executable.
        stats_file: x265 statistics file; defaults to one beside output_path.

    Returns:
        A single command for one-pass plans; two commands (analysis pass to
        the null device, then the encode) for two-pass software plans.
    """
    base = [str(ffmpeg_path), "-y", "-hide_banner", "-i", str(input_path)]

    two_pass = plan.two_pass and plan.encoder.family is EncoderFamily.SOFTWARE_X265
    if plan.two_pass and not two_pass:
        logger.warning(
            "Two-pass encoding requested for %s but not supported. Using single-pass.",
            plan.encoder.encoder,
        )

    if not two_pass:
        cmd = base + build_quality_args(plan) + build_hdr_args(plan)
        cmd += build_stream_args(plan) + [str(output_path)]
        return [cmd]

    stats = stats_file or default_stats_file(output_path)
    null_device = "NUL" if platform.system() == "Windows" else "/dev/null"

    pass1 = base + build_quality_args(plan, 1, stats) + build_hdr_args(plan)
    pass1 += ["-an", "-sn", "-f", "null", null_device]

    pass2 = base + build_quality_args(plan, 2, stats) + build_hdr_args(plan)
    pass2 += build_stream_args(plan) + [str(output_path)]
    return [pass1, pass2]
