"""Bitrate-driven quality planning for the size-reduction policy.

The planner derives the file's current bitrate, an informational target
bitrate for the requested reduction, and a quality parameter built from a
resolution-based base plus a reduction adjustment.
"""

import logging
import math

from transcode_planner.domain.models import BitrateAnalysis, MediaProbe
from transcode_planner.policy.exceptions import InvalidProbeError
from transcode_planner.policy.intent import QualityIntent

logger = logging.getLogger(__name__)

MIN_QUALITY_PARAM = 16
MAX_QUALITY_PARAM = 32

# Reduction fraction at which the adjustment is zero
NEUTRAL_REDUCTION = 0.4

# (minimum pixel count, base quality), checked from largest to smallest
RESOLUTION_BASE_QUALITY: tuple[tuple[int, int], ...] = (
    (3840 * 2160, 20),
    (1920 * 1080, 23),
    (1280 * 720, 26),
)
FALLBACK_BASE_QUALITY = 28


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going toward +infinity.

    ``round()`` rounds halves to even (``round(2.5) == 2``); quality and
    bitrate figures are rounded half-up instead (2.5 -> 3, -0.5 -> 0).
    """
    return math.floor(value + 0.5)


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def resolution_base_quality(width: int, height: int) -> int:
    """Return the base quality parameter for a frame size."""
    pixels = width * height
    for min_pixels, base in RESOLUTION_BASE_QUALITY:
        if pixels >= min_pixels:
            return base
    return FALLBACK_BASE_QUALITY


def reduction_adjustment(reduction_fraction: float) -> int:
    """Quality offset for a reduction fraction; zero at the neutral point."""
    return round_half_up((reduction_fraction - NEUTRAL_REDUCTION) * 10)


def current_bitrate_kbps(probe: MediaProbe) -> float:
    """Average bitrate of the whole file in kbit/s.

    Raises:
        InvalidProbeError: If the duration is not positive.
    """
    if not probe.duration_seconds or probe.duration_seconds <= 0:
        raise InvalidProbeError("duration_seconds", probe.duration_seconds)
    return probe.file_size_bytes * 8 / probe.duration_seconds / 1000


def plan_bitrate(probe: MediaProbe, intent: QualityIntent) -> BitrateAnalysis:
    """Compute bitrate figures and the final quality parameter.

    Args:
        probe: Normalized probe of the source file.
        intent: Quality intent carrying the requested reduction percent.

    Returns:
        BitrateAnalysis with final_quality_param clamped to [16, 32].

    Raises:
        InvalidProbeError: If the probe duration is zero or negative.
    """
    current = current_bitrate_kbps(probe)
    fraction = intent.reduction_fraction
    target = round_half_up(current * (1 - fraction))

    base = resolution_base_quality(probe.width, probe.height)
    adjustment = reduction_adjustment(fraction)
    final = clamp(base + adjustment, MIN_QUALITY_PARAM, MAX_QUALITY_PARAM)

    logger.info(
        "Current bitrate: %.0f kbps, target: %d kbps, quality: %d "
        "(base %d, adjustment %+d)",
        current,
        target,
        final,
        base,
        adjustment,
    )
    return BitrateAnalysis(
        current_bitrate_kbps=current,
        target_bitrate_kbps=float(target),
        resolution_base_quality=base,
        adjustment=adjustment,
        final_quality_param=final,
    )
