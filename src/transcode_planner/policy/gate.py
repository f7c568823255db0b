"""Post-encode quality gate.

Decides whether an encoded result is kept or reverted, from the size change
and an optional perceptual similarity score.
"""

import logging
import math

from transcode_planner.domain.enums import GateReason
from transcode_planner.domain.models import GateDecision, MediaProbe
from transcode_planner.policy.exceptions import InvalidProbeError
from transcode_planner.policy.intent import QualityIntent

logger = logging.getLogger(__name__)


def size_delta_percent(original_bytes: int, transcoded_bytes: int) -> float:
    """Percent size change from original to transcoded (negative = smaller).

    Raises:
        InvalidProbeError: If the original size is zero.
    """
    if original_bytes <= 0:
        raise InvalidProbeError("file_size_bytes", original_bytes, "original file")
    return (transcoded_bytes - original_bytes) / original_bytes * 100


def usable_score(score: float | None) -> float | None:
    """Return score if it is a finite value in [0, 1], else None."""
    if score is None or isinstance(score, bool):
        return None
    try:
        value = float(score)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        logger.warning("Ignoring out-of-range perceptual score: %r", score)
        return None
    return value


def evaluate_gate(
    original: MediaProbe,
    transcoded: MediaProbe,
    intent: QualityIntent,
    perceptual_score: float | None = None,
) -> GateDecision:
    """Decide accept or revert for an encoded file.

    Size is checked first. The perceptual score is compared only when one
    is available; acceptance without a score is reported as unverified.

    Args:
        original: Probe of the source file.
        transcoded: Probe of the encoded result.
        intent: Quality intent supplying both thresholds.
        perceptual_score: Optional similarity in [0, 1].

    Returns:
        GateDecision with the size delta and the score that was used.

    Raises:
        InvalidProbeError: If the original file size is zero.
    """
    delta = size_delta_percent(original.file_size_bytes, transcoded.file_size_bytes)
    score = usable_score(perceptual_score)

    if delta > intent.max_size_increase_percent:
        logger.warning(
            "File size increased by %.1f%% (limit %.1f%%), reverting",
            delta,
            intent.max_size_increase_percent,
        )
        return GateDecision(
            accepted=False,
            reason=GateReason.SIZE_REGRESSION,
            size_delta_percent=delta,
            perceptual_score=score,
        )

    if score is None:
        logger.warning(
            "No perceptual score available; accepting on size alone (%.1f%%)", delta
        )
        return GateDecision(
            accepted=True,
            reason=GateReason.QUALITY_UNVERIFIED,
            size_delta_percent=delta,
        )

    if score < intent.min_quality_threshold:
        logger.warning(
            "Quality score %.4f below threshold %.4f, reverting",
            score,
            intent.min_quality_threshold,
        )
        return GateDecision(
            accepted=False,
            reason=GateReason.QUALITY_REGRESSION,
            size_delta_percent=delta,
            perceptual_score=score,
        )

    logger.info("Validation passed: size %+.1f%%, quality %.4f", delta, score)
    return GateDecision(
        accepted=True,
        reason=GateReason.QUALITY_VERIFIED,
        size_delta_percent=delta,
        perceptual_score=score,
    )
