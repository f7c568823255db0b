"""Per-file pipeline orchestration."""

from transcode_planner.workflow.processor import (
    GateOutcome,
    PlanOutcome,
    TranscodePipeline,
)
from transcode_planner.workflow.run import ALLOWED_TRANSITIONS, FileRun

__all__ = [
    "TranscodePipeline",
    "PlanOutcome",
    "GateOutcome",
    "FileRun",
    "ALLOWED_TRANSITIONS",
]
