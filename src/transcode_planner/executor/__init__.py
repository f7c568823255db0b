"""Executor-side adapters that turn plans into encoder invocations."""

from transcode_planner.executor.command import (
    build_ffmpeg_commands,
    build_hdr_args,
    build_quality_args,
    build_stream_args,
    output_suffix,
)

__all__ = [
    "build_ffmpeg_commands",
    "build_quality_args",
    "build_hdr_args",
    "build_stream_args",
    "output_suffix",
]
