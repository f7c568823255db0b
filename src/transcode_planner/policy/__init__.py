"""Planning policy: tiers, bitrate math, plan assembly and the quality gate."""

from transcode_planner.policy.bitrate import plan_bitrate
from transcode_planner.policy.exceptions import (
    InvalidIntentError,
    InvalidProbeError,
    InvalidTransitionError,
    NoVideoStreamError,
    PlannerError,
)
from transcode_planner.policy.gate import evaluate_gate
from transcode_planner.policy.intent import (
    QualityIntent,
    QualityIntentModel,
    intent_from_dict,
    load_intent,
    merge_intent,
)
from transcode_planner.policy.plan import build_encode_plan
from transcode_planner.policy.presets import (
    QUALITY_TIER_PARAMS,
    parse_tier,
    resolve_tier,
)

__all__ = [
    "PlannerError",
    "InvalidProbeError",
    "InvalidIntentError",
    "NoVideoStreamError",
    "InvalidTransitionError",
    "QualityIntent",
    "QualityIntentModel",
    "intent_from_dict",
    "load_intent",
    "merge_intent",
    "QUALITY_TIER_PARAMS",
    "parse_tier",
    "resolve_tier",
    "plan_bitrate",
    "build_encode_plan",
    "evaluate_gate",
]
