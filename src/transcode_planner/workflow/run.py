"""Per-file run record and its state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from transcode_planner.domain.enums import FileState
from transcode_planner.policy.exceptions import InvalidTransitionError, PlannerError

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[FileState, frozenset[FileState]] = {
    FileState.PROBED: frozenset({FileState.PLANNED, FileState.FAILED}),
    FileState.PLANNED: frozenset(
        {FileState.SKIPPED, FileState.PLAN_READY, FileState.FAILED}
    ),
    FileState.PLAN_READY: frozenset(
        {FileState.AWAITING_EXTERNAL_ENCODE, FileState.FAILED}
    ),
    FileState.AWAITING_EXTERNAL_ENCODE: frozenset(
        {FileState.ACCEPTED, FileState.REVERTED, FileState.FAILED}
    ),
    FileState.SKIPPED: frozenset(),
    FileState.ACCEPTED: frozenset(),
    FileState.REVERTED: frozenset(),
    FileState.FAILED: frozenset(),
}


@dataclass
class FileRun:
    """State of one file's trip through the pipeline.

    A run is owned by a single pipeline invocation and never shared
    between files.
    """

    run_id: str
    path: Path | None = None
    state: FileState = FileState.PROBED
    history: list[FileState] = field(default_factory=list)
    error: PlannerError | None = None

    def __post_init__(self) -> None:
        if not self.history:
            self.history.append(self.state)

    def can_transition(self, target: FileState) -> bool:
        return target in ALLOWED_TRANSITIONS[self.state]

    def transition(self, target: FileState) -> None:
        """Move to target state.

        Raises:
            InvalidTransitionError: If target is not reachable from the
                current state.
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self.state.value, target.value)
        logger.debug("Run %s: %s -> %s", self.run_id, self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def fail(self, error: PlannerError) -> None:
        """Record a fatal error and move to the failed state."""
        self.transition(FileState.FAILED)
        self.error = error

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal
