"""Unit tests for the quality tier table."""

import logging

import pytest

from transcode_planner.domain.enums import QualityTier, SpeedPreset
from transcode_planner.policy.presets import (
    DEFAULT_TIER,
    QUALITY_TIER_PARAMS,
    parse_tier,
    resolve_tier,
)


class TestTierTable:
    """Tests for QUALITY_TIER_PARAMS."""

    @pytest.mark.parametrize(
        "tier,quality,preset",
        [
            (QualityTier.ARCHIVE, 18, SpeedPreset.VERYSLOW),
            (QualityTier.HIGH, 20, SpeedPreset.SLOW),
            (QualityTier.BALANCED, 23, SpeedPreset.MEDIUM),
            (QualityTier.EFFICIENT, 26, SpeedPreset.FAST),
        ],
    )
    def test_tier_values(self, tier, quality, preset):
        """Each tier has a fixed quality value and preset."""
        params = resolve_tier(tier)
        assert params.base_quality == quality
        assert params.speed_preset is preset

    def test_stricter_tiers_have_lower_quality_values(self):
        """Quality values increase from archive to efficient."""
        values = [params.base_quality for params in QUALITY_TIER_PARAMS.values()]
        assert values == sorted(values)

    def test_default_is_high(self):
        """High is the default tier."""
        assert DEFAULT_TIER is QualityTier.HIGH


class TestParseTier:
    """Tests for parse_tier."""

    def test_case_insensitive(self):
        """Tier names ignore case and surrounding space."""
        assert parse_tier(" Archive ") is QualityTier.ARCHIVE

    def test_enum_passthrough(self):
        """Enum members are returned as-is."""
        assert parse_tier(QualityTier.EFFICIENT) is QualityTier.EFFICIENT

    @pytest.mark.parametrize("value", ["ultra", "", None])
    def test_unknown_falls_back_to_high(self, value, caplog):
        """Unknown names resolve to High with a warning."""
        caplog.set_level(logging.WARNING)
        assert parse_tier(value) is QualityTier.HIGH
        assert "Unrecognized quality tier" in caplog.text

    def test_resolve_unknown_tier(self):
        """resolve_tier never raises."""
        assert resolve_tier("bogus").base_quality == 20
