"""Transcode pipeline: plan a file, then gate its encoded result.

TranscodePipeline is the boundary between the planning stages and their
callers. Stage functions raise typed PlannerErrors; the pipeline turns them
into FAILED outcomes so no PlannerError escapes.
"""

import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from transcode_planner.domain.enums import (
    FileState,
    PlanningMode,
    SkipReason,
    SpeedPreset,
)
from transcode_planner.domain.models import (
    EncodePlan,
    GateDecision,
    MediaProbe,
    PlanSkip,
)
from transcode_planner.introspector.interface import MediaProber
from transcode_planner.introspector.parsers import analyze_probe
from transcode_planner.logging.context import file_context
from transcode_planner.policy.bitrate import plan_bitrate
from transcode_planner.policy.exceptions import (
    InvalidTransitionError,
    NoVideoStreamError,
    PlannerError,
)
from transcode_planner.policy.gate import evaluate_gate
from transcode_planner.policy.intent import QualityIntent
from transcode_planner.policy.plan import (
    DEFAULT_CONTAINER,
    DEFAULT_TARGET_CODEC,
    build_encode_plan,
    check_skip,
)
from transcode_planner.policy.presets import resolve_tier
from transcode_planner.tools.detection import HostCapabilities
from transcode_planner.tools.encoders import select_encoder
from transcode_planner.tools.ssim import PerceptualScorer, measure_quality
from transcode_planner.workflow.run import FileRun

logger = logging.getLogger(__name__)

# Size-reduction encodes always use this x265 preset
SIZE_REDUCTION_PRESET = SpeedPreset.MEDIUM


@dataclass(frozen=True)
class PlanOutcome:
    """Result of planning one file."""

    run: FileRun
    probe: MediaProbe | None = None
    result: EncodePlan | PlanSkip | None = None

    @property
    def state(self) -> FileState:
        return self.run.state

    @property
    def plan(self) -> EncodePlan | None:
        return self.result if isinstance(self.result, EncodePlan) else None

    @property
    def skip(self) -> PlanSkip | None:
        return self.result if isinstance(self.result, PlanSkip) else None

    @property
    def error(self) -> PlannerError | None:
        return self.run.error


@dataclass(frozen=True)
class GateOutcome:
    """Result of gating one encoded file."""

    run: FileRun
    decision: GateDecision | None = None

    @property
    def state(self) -> FileState:
        return self.run.state

    @property
    def error(self) -> PlannerError | None:
        return self.run.error


class TranscodePipeline:
    """Runs the planning stages for files and gates their encoded results.

    The pipeline holds only immutable configuration and injected
    collaborators; each call creates its own FileRun, so one instance can
    plan several files concurrently.
    """

    def __init__(
        self,
        intent: QualityIntent,
        capabilities: HostCapabilities,
        prober: MediaProber | None = None,
        scorer: PerceptualScorer | None = None,
        target_codec: str = DEFAULT_TARGET_CODEC,
        container: str = DEFAULT_CONTAINER,
    ) -> None:
        """Initialize the pipeline.

        Args:
            intent: Validated quality intent applied to every file.
            capabilities: Host capability checks for encoder selection.
            prober: Source of raw probe documents; required by plan_file
                unless raw probe data is passed in.
            scorer: Optional perceptual scorer used by gate_file.
            target_codec: Codec the encode produces.
            container: Output container.
        """
        self.intent = intent
        self.capabilities = capabilities
        self.prober = prober
        self.scorer = scorer
        self.target_codec = target_codec
        self.container = container
        self._run_ids = itertools.count(1)

    def new_run(self, path: Path | None = None) -> FileRun:
        """Create a run record with the next run id (F001, F002, ...)."""
        return FileRun(run_id=f"F{next(self._run_ids):03d}", path=path)

    # =========================================================================
    # Planning
    # =========================================================================

    def plan_file(
        self,
        path: Path,
        raw_probe: dict[str, Any] | None = None,
        file_size_bytes: int | None = None,
    ) -> PlanOutcome:
        """Probe and plan one file.

        Args:
            path: Media file path.
            raw_probe: Pre-captured probe document; the prober is used when
                omitted.
            file_size_bytes: Size to use when the probe lacks format.size.

        Returns:
            PlanOutcome in state PLAN_READY, SKIPPED or FAILED.
        """
        if raw_probe is None and self.prober is None:
            raise ValueError("plan_file needs a prober or raw_probe")

        run = self.new_run(path)
        with file_context(run.run_id, path):
            try:
                if raw_probe is None:
                    raw_probe = self.prober.probe(path)
                probe = analyze_probe(raw_probe, file_size_bytes, str(path))
            except NoVideoStreamError:
                logger.info("No video stream in %s, passing through", path.name)
                run.transition(FileState.PLANNED)
                run.transition(FileState.SKIPPED)
                skip = PlanSkip(SkipReason.NO_VIDEO_STREAM, "no video stream present")
                return PlanOutcome(run=run, result=skip)
            except PlannerError as e:
                logger.error("Cannot analyze %s: %s", path.name, e)
                run.fail(e)
                return PlanOutcome(run=run)

            return self._plan(run, probe)

    def plan_probe(self, probe: MediaProbe, path: Path | None = None) -> PlanOutcome:
        """Plan an already-normalized probe."""
        run = self.new_run(path)
        with file_context(run.run_id, path):
            return self._plan(run, probe)

    def _plan(self, run: FileRun, probe: MediaProbe) -> PlanOutcome:
        intent = self.intent
        skip = check_skip(probe, self.target_codec)
        if skip is not None:
            # No capability probing or bitrate work for pass-through files
            logger.info("Skipping encode: %s", skip.detail)
            run.transition(FileState.PLANNED)
            run.transition(FileState.SKIPPED)
            return PlanOutcome(run=run, probe=probe, result=skip)

        try:
            encoder = select_encoder(intent, self.capabilities)
            tier_params = resolve_tier(intent.tier)
            bitrate = None
            if intent.mode is PlanningMode.SIZE_REDUCTION:
                bitrate = plan_bitrate(probe, intent)
                quality_param = bitrate.final_quality_param
                speed_preset = SIZE_REDUCTION_PRESET
            else:
                quality_param = tier_params.base_quality
                speed_preset = tier_params.speed_preset

            run.transition(FileState.PLANNED)
            result = build_encode_plan(
                probe,
                encoder,
                quality_param,
                speed_preset,
                intent,
                bitrate=bitrate,
                target_codec=self.target_codec,
                container=self.container,
            )
        except PlannerError as e:
            logger.error("Planning failed: %s", e)
            run.fail(e)
            return PlanOutcome(run=run, probe=probe)

        if isinstance(result, PlanSkip):
            run.transition(FileState.SKIPPED)
        else:
            run.transition(FileState.PLAN_READY)
        return PlanOutcome(run=run, probe=probe, result=result)

    def mark_dispatched(self, outcome: PlanOutcome) -> None:
        """Record that the plan was handed to the external executor."""
        outcome.run.transition(FileState.AWAITING_EXTERNAL_ENCODE)

    # =========================================================================
    # Gating
    # =========================================================================

    def measure(self, original: Path, transcoded: Path) -> float | None:
        """Perceptual score from the injected scorer; None when unavailable."""
        return measure_quality(self.scorer, original, transcoded)

    def gate_file(
        self,
        run: FileRun,
        original: MediaProbe,
        transcoded: MediaProbe,
        perceptual_score: float | None = None,
        original_path: Path | None = None,
        transcoded_path: Path | None = None,
    ) -> GateOutcome:
        """Accept or revert the encoded result of a dispatched run.

        When no score is given and both paths are known, the injected
        scorer is asked for one.

        Returns:
            GateOutcome in state ACCEPTED, REVERTED or FAILED.

        Raises:
            InvalidTransitionError: If the run is not awaiting an encode.
        """
        if run.state is not FileState.AWAITING_EXTERNAL_ENCODE:
            raise InvalidTransitionError(run.state.value, "gated")

        with file_context(run.run_id, run.path):
            if (
                perceptual_score is None
                and original_path is not None
                and transcoded_path is not None
            ):
                perceptual_score = self.measure(original_path, transcoded_path)

            try:
                decision = evaluate_gate(
                    original, transcoded, self.intent, perceptual_score
                )
            except PlannerError as e:
                logger.error("Gate failed: %s", e)
                run.fail(e)
                return GateOutcome(run=run)

            run.transition(
                FileState.ACCEPTED if decision.accepted else FileState.REVERTED
            )
            return GateOutcome(run=run, decision=decision)
