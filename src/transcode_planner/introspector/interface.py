"""MediaProber interface for raw probe extraction."""

from pathlib import Path
from typing import Any, Protocol

from transcode_planner.policy.exceptions import PlannerError


class MediaProbeError(PlannerError):
    """Raised when the external prober cannot read a file."""

    pass


class MediaProber(Protocol):
    """Protocol for media probe implementations.

    A prober returns the raw, unvalidated probe document for a file
    (ffprobe's ``-show_streams -show_format`` JSON shape). Normalization
    into a MediaProbe happens in :func:`analyze_probe`.
    """

    def probe(self, path: Path) -> dict[str, Any]:
        """Return the raw probe document for a media file.

        Args:
            path: Path to the media file.

        Returns:
            Dictionary with ``streams`` and ``format`` keys.

        Raises:
            MediaProbeError: If the file cannot be probed.
        """
        ...
