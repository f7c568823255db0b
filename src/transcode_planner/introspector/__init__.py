"""Introspector module for Transcode Planner.

- MediaProber: Protocol defining the raw probe interface
- FFprobeProber: Production implementation using ffprobe
- StaticProber: Pre-captured probe documents (CLI --probe-json, tests)
- analyze_probe: Normalize a raw probe document into a MediaProbe
- MediaProbeError: Exception for probe failures
"""

from transcode_planner.introspector.ffprobe import FFprobeProber
from transcode_planner.introspector.interface import MediaProbeError, MediaProber
from transcode_planner.introspector.parsers import analyze_probe
from transcode_planner.introspector.static import StaticProber

__all__ = [
    "MediaProber",
    "MediaProbeError",
    "FFprobeProber",
    "StaticProber",
    "analyze_probe",
]
