"""Unit tests for quality intent validation and loading."""

from pathlib import Path

import pytest

from transcode_planner.domain.enums import PlanningMode, QualityTier
from transcode_planner.policy.exceptions import InvalidIntentError
from transcode_planner.policy.intent import (
    QualityIntent,
    intent_from_dict,
    load_intent,
    merge_intent,
)


class TestQualityIntent:
    """Tests for the QualityIntent dataclass."""

    def test_defaults(self):
        """Defaults match the documented intent."""
        intent = QualityIntent()
        assert intent.tier is QualityTier.HIGH
        assert intent.use_gpu is True
        assert intent.preserve_hdr is True
        assert intent.target_reduction_percent == 50.0
        assert intent.min_quality_threshold == 0.95
        assert intent.max_size_increase_percent == 10.0
        assert intent.mode is PlanningMode.FIXED_QUALITY

    @pytest.mark.parametrize("value", [20, 80, 50.5])
    def test_reduction_in_range(self, value):
        """Bounds are inclusive."""
        assert QualityIntent(target_reduction_percent=value).reduction_fraction == (
            value / 100
        )

    @pytest.mark.parametrize(
        "field,value",
        [
            ("target_reduction_percent", 19.9),
            ("target_reduction_percent", 81),
            ("min_quality_threshold", 0.79),
            ("min_quality_threshold", 1.01),
            ("max_size_increase_percent", -1),
            ("max_size_increase_percent", 51),
        ],
    )
    def test_out_of_range(self, field, value):
        """Out-of-range values raise InvalidIntentError naming the field."""
        with pytest.raises(InvalidIntentError) as exc_info:
            QualityIntent(**{field: value})
        assert exc_info.value.field == field

    def test_tier_must_be_enum(self):
        """Raw strings are not accepted for tier."""
        with pytest.raises(InvalidIntentError):
            QualityIntent(tier="high")


class TestIntentFromDict:
    """Tests for intent_from_dict."""

    def test_empty_gives_defaults(self):
        """Missing keys take defaults."""
        assert intent_from_dict({}) == QualityIntent()

    def test_full(self):
        """All fields are converted."""
        intent = intent_from_dict(
            {
                "tier": "efficient",
                "use_gpu": False,
                "preserve_hdr": False,
                "target_reduction_percent": 60,
                "min_quality_threshold": 0.9,
                "max_size_increase_percent": 0,
                "mode": "reduce",
            }
        )
        assert intent.tier is QualityTier.EFFICIENT
        assert intent.use_gpu is False
        assert intent.target_reduction_percent == 60.0
        assert intent.mode is PlanningMode.SIZE_REDUCTION

    def test_unknown_tier_falls_back(self):
        """Unknown tier names resolve to High."""
        assert intent_from_dict({"tier": "ultra"}).tier is QualityTier.HIGH

    def test_out_of_range(self):
        """Range errors name the field."""
        with pytest.raises(InvalidIntentError) as exc_info:
            intent_from_dict({"target_reduction_percent": 95})
        assert exc_info.value.field == "target_reduction_percent"
        assert "target_reduction_percent" in str(exc_info.value)

    def test_unknown_field(self):
        """Unknown fields are rejected."""
        with pytest.raises(InvalidIntentError):
            intent_from_dict({"crf": 18})

    def test_bad_mode(self):
        """Only fixed and reduce are valid modes."""
        with pytest.raises(InvalidIntentError) as exc_info:
            intent_from_dict({"mode": "lossless"})
        assert exc_info.value.field == "mode"


class TestLoadIntent:
    """Tests for load_intent."""

    def test_load_yaml(self, temp_dir: Path):
        """Fields are read from YAML."""
        path = temp_dir / "intent.yaml"
        path.write_text("tier: archive\nmode: reduce\ntarget_reduction_percent: 30\n")

        intent = load_intent(path)
        assert intent.tier is QualityTier.ARCHIVE
        assert intent.mode is PlanningMode.SIZE_REDUCTION
        assert intent.target_reduction_percent == 30.0

    def test_merges_over_base(self, temp_dir: Path):
        """Fields missing from the file come from the base intent."""
        path = temp_dir / "intent.yaml"
        path.write_text("tier: balanced\n")
        base = QualityIntent(use_gpu=False, max_size_increase_percent=5)

        intent = load_intent(path, base)
        assert intent.tier is QualityTier.BALANCED
        assert intent.use_gpu is False
        assert intent.max_size_increase_percent == 5.0

    def test_empty_file(self, temp_dir: Path):
        """An empty file gives the defaults."""
        path = temp_dir / "intent.yaml"
        path.write_text("")
        assert load_intent(path) == QualityIntent()

    def test_missing_file(self, temp_dir: Path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_intent(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir: Path):
        """YAML syntax errors raise InvalidIntentError."""
        path = temp_dir / "intent.yaml"
        path.write_text("tier: [unclosed\n")
        with pytest.raises(InvalidIntentError, match="Invalid YAML"):
            load_intent(path)

    def test_not_a_mapping(self, temp_dir: Path):
        """A YAML list is rejected."""
        path = temp_dir / "intent.yaml"
        path.write_text("- high\n- low\n")
        with pytest.raises(InvalidIntentError, match="mapping"):
            load_intent(path)


class TestMergeIntent:
    """Tests for merge_intent."""

    def test_none_values_ignored(self):
        """None overrides leave the base untouched."""
        base = QualityIntent(use_gpu=False)
        assert merge_intent(base, use_gpu=None, tier=None) == base

    def test_override_applied(self):
        """Overrides replace base values and accept enums."""
        intent = merge_intent(
            QualityIntent(), tier=QualityTier.ARCHIVE, mode=PlanningMode.SIZE_REDUCTION
        )
        assert intent.tier is QualityTier.ARCHIVE
        assert intent.mode is PlanningMode.SIZE_REDUCTION

    def test_override_revalidated(self):
        """Overrides are range checked."""
        with pytest.raises(InvalidIntentError):
            merge_intent(QualityIntent(), min_quality_threshold=0.5)

    def test_unknown_key(self):
        """Unknown override names are rejected."""
        with pytest.raises(InvalidIntentError, match="Unknown intent field"):
            merge_intent(QualityIntent(), crf=20)
