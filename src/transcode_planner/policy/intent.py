"""Quality intent: the user-chosen knobs for one planning run.

QualityIntent is the validated value the planning stages consume.
QualityIntentModel is the pydantic boundary model used for YAML intent files,
config sections and CLI overrides.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from transcode_planner.domain.enums import PlanningMode, QualityTier
from transcode_planner.policy.exceptions import InvalidIntentError
from transcode_planner.policy.presets import parse_tier

logger = logging.getLogger(__name__)

REDUCTION_RANGE = (20.0, 80.0)
MIN_QUALITY_RANGE = (0.8, 1.0)
SIZE_INCREASE_RANGE = (0.0, 50.0)


def _check_range(field: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidIntentError(f"{field} must be a number, got {value!r}", field)
    if not low <= value <= high:
        raise InvalidIntentError(
            f"{field} must be between {low:g} and {high:g}, got {value:g}", field
        )


@dataclass(frozen=True)
class QualityIntent:
    """Validated quality intent.

    Attributes:
        tier: Named quality tier.
        use_gpu: Prefer hardware encoders when present.
        preserve_hdr: Carry HDR color metadata onto the encode.
        target_reduction_percent: Requested size reduction, 20-80.
        min_quality_threshold: Minimum perceptual score to accept, 0.8-1.0.
        max_size_increase_percent: Largest tolerated size growth, 0-50.
        mode: Which policy produces the quality parameter.
    """

    tier: QualityTier = QualityTier.HIGH
    use_gpu: bool = True
    preserve_hdr: bool = True
    target_reduction_percent: float = 50.0
    min_quality_threshold: float = 0.95
    max_size_increase_percent: float = 10.0
    mode: PlanningMode = PlanningMode.FIXED_QUALITY

    def __post_init__(self) -> None:
        if not isinstance(self.tier, QualityTier):
            raise InvalidIntentError(f"Invalid tier: {self.tier!r}", "tier")
        if not isinstance(self.mode, PlanningMode):
            raise InvalidIntentError(f"Invalid mode: {self.mode!r}", "mode")
        _check_range(
            "target_reduction_percent", self.target_reduction_percent, REDUCTION_RANGE
        )
        _check_range(
            "min_quality_threshold", self.min_quality_threshold, MIN_QUALITY_RANGE
        )
        _check_range(
            "max_size_increase_percent",
            self.max_size_increase_percent,
            SIZE_INCREASE_RANGE,
        )

    @property
    def reduction_fraction(self) -> float:
        """Target reduction as a fraction (0.5 for 50%)."""
        return self.target_reduction_percent / 100


class QualityIntentModel(BaseModel):
    """Pydantic model for quality intent input."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tier: str = QualityTier.HIGH.value
    use_gpu: bool = True
    preserve_hdr: bool = True
    target_reduction_percent: float = Field(default=50.0, ge=20.0, le=80.0)
    min_quality_threshold: float = Field(default=0.95, ge=0.8, le=1.0)
    max_size_increase_percent: float = Field(default=10.0, ge=0.0, le=50.0)
    mode: Literal["fixed", "reduce"] = "fixed"

    @field_validator("tier", mode="before")
    @classmethod
    def validate_tier(cls, v: Any) -> str:
        """Accept any string; unknown names fall back when converted."""
        if not isinstance(v, str):
            raise ValueError(f"tier must be a string, got {type(v).__name__}")
        return v

    def to_intent(self) -> QualityIntent:
        """Convert to the frozen QualityIntent used by the planner."""
        return QualityIntent(
            tier=parse_tier(self.tier),
            use_gpu=self.use_gpu,
            preserve_hdr=self.preserve_hdr,
            target_reduction_percent=self.target_reduction_percent,
            min_quality_threshold=self.min_quality_threshold,
            max_size_increase_percent=self.max_size_increase_percent,
            mode=PlanningMode(self.mode),
        )


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a pydantic error into (message, field) using the first error."""
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Intent validation failed: {loc}: {msg}", loc
        return f"Intent validation failed: {msg}", None
    return f"Intent validation failed: {error}", None


def intent_from_dict(data: dict[str, Any]) -> QualityIntent:
    """Validate a mapping of intent fields.

    Args:
        data: Intent fields; missing keys take their defaults.

    Returns:
        Validated QualityIntent.

    Raises:
        InvalidIntentError: If any field is malformed or out of range.
    """
    try:
        model = QualityIntentModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise InvalidIntentError(message, field) from e
    return model.to_intent()


def load_intent(intent_path: Path, base: QualityIntent | None = None) -> QualityIntent:
    """Load and validate a quality intent from a YAML file.

    Fields missing from the file come from base when given, otherwise from
    the QualityIntent defaults.

    Raises:
        InvalidIntentError: If the file is malformed or values are invalid.
        FileNotFoundError: If the file does not exist.
    """
    if not intent_path.exists():
        raise FileNotFoundError(f"Intent file not found: {intent_path}")

    try:
        with open(intent_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidIntentError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidIntentError("Intent file must be a YAML mapping")

    intent = merge_intent(base, **data) if base is not None else intent_from_dict(data)
    logger.debug("Loaded intent from %s: %s", intent_path, intent)
    return intent


def merge_intent(base: QualityIntent, **overrides: Any) -> QualityIntent:
    """Return base with non-None overrides applied and re-validated."""
    data: dict[str, Any] = {
        "tier": base.tier.value,
        "use_gpu": base.use_gpu,
        "preserve_hdr": base.preserve_hdr,
        "target_reduction_percent": base.target_reduction_percent,
        "min_quality_threshold": base.min_quality_threshold,
        "max_size_increase_percent": base.max_size_increase_percent,
        "mode": base.mode.value,
    }
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in data:
            raise InvalidIntentError(f"Unknown intent field: {key}", key)
        if isinstance(value, (QualityTier, PlanningMode)):
            value = value.value
        data[key] = value
    return intent_from_dict(data)
