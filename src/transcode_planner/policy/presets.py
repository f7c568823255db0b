"""Quality tier table.

Each named tier maps to a base CRF-equivalent quality parameter and an x265
speed preset. Stricter tiers map to lower quality values.
"""

import logging

from transcode_planner.domain.enums import QualityTier, SpeedPreset
from transcode_planner.domain.models import QualityTierParams

logger = logging.getLogger(__name__)

DEFAULT_TIER = QualityTier.HIGH

QUALITY_TIER_PARAMS: dict[QualityTier, QualityTierParams] = {
    QualityTier.ARCHIVE: QualityTierParams(
        QualityTier.ARCHIVE, base_quality=18, speed_preset=SpeedPreset.VERYSLOW
    ),
    QualityTier.HIGH: QualityTierParams(
        QualityTier.HIGH, base_quality=20, speed_preset=SpeedPreset.SLOW
    ),
    QualityTier.BALANCED: QualityTierParams(
        QualityTier.BALANCED, base_quality=23, speed_preset=SpeedPreset.MEDIUM
    ),
    QualityTier.EFFICIENT: QualityTierParams(
        QualityTier.EFFICIENT, base_quality=26, speed_preset=SpeedPreset.FAST
    ),
}


def parse_tier(value: QualityTier | str | None) -> QualityTier:
    """Map a tier name to a QualityTier, defaulting to High.

    Args:
        value: Tier enum member or name (case-insensitive).

    Returns:
        The matching tier, or the High tier for unrecognized names.
    """
    if isinstance(value, QualityTier):
        return value
    if value is not None:
        try:
            return QualityTier(str(value).strip().casefold())
        except ValueError:
            pass
    logger.warning("Unrecognized quality tier %r, using %s", value, DEFAULT_TIER.value)
    return DEFAULT_TIER


def resolve_tier(tier: QualityTier | str | None) -> QualityTierParams:
    """Look up base quality and speed preset for a tier. Never raises."""
    return QUALITY_TIER_PARAMS[parse_tier(tier)]
