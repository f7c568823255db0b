"""Domain models and enums for Transcode Planner.

This package contains the value types passed between the planning stages:

- Domain models: MediaProbe, QualityTierParams, EncoderChoice, BitrateAnalysis,
  HdrPassthrough, EncodePlan, PlanSkip, GateDecision
- Domain enums: QualityTier, SpeedPreset, EncoderFamily, PlanningMode,
  HDRType, SkipReason, GateReason, FileState

Usage:
    from transcode_planner.domain import MediaProbe, EncodePlan
    from transcode_planner.domain import QualityTier, EncoderFamily
"""

from .enums import (
    EncoderFamily,
    FileState,
    GateReason,
    HDRType,
    PlanningMode,
    QualityTier,
    SkipReason,
    SpeedPreset,
)
from .models import (
    BitrateAnalysis,
    EncodePlan,
    EncoderChoice,
    GateDecision,
    HdrPassthrough,
    MediaProbe,
    PlanSkip,
    QualityTierParams,
)

__all__ = [
    # Models
    "MediaProbe",
    "QualityTierParams",
    "EncoderChoice",
    "BitrateAnalysis",
    "HdrPassthrough",
    "EncodePlan",
    "PlanSkip",
    "GateDecision",
    # Enums
    "QualityTier",
    "SpeedPreset",
    "EncoderFamily",
    "PlanningMode",
    "HDRType",
    "SkipReason",
    "GateReason",
    "FileState",
]
