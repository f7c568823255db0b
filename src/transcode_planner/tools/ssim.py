"""Perceptual similarity scoring.

The quality gate accepts an optional score in [0, 1]. A scorer returns None
when no score can be produced; the gate then marks acceptance as unverified.
"""

import logging
import re
import subprocess  # nosec B404 - subprocess is required for ffmpeg ssim filter
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Summary line written by the ssim filter at info level, e.g.
# "[Parsed_ssim_0 @ 0x...] SSIM Y:0.987 (18.9) U:0.99 V:0.99 All:0.9884 (19.3)"
SSIM_SUMMARY_PATTERN = re.compile(r"SSIM\s.*?All:\s*([0-9]*\.?[0-9]+)")

SSIM_TIMEOUT = 3600


class PerceptualScorer(Protocol):
    """Compute a similarity score between an original and an encoded file."""

    def score(self, original: Path, transcoded: Path) -> float | None:
        """Return a similarity score in [0, 1], or None when unavailable."""
        ...


def parse_ssim_output(stderr: str) -> float | None:
    """Extract the overall SSIM value from ffmpeg stderr.

    Args:
        stderr: Captured ffmpeg stderr.

    Returns:
        The last ``All:`` value found, or None if there is none.
    """
    matches = SSIM_SUMMARY_PATTERN.findall(stderr)
    if not matches:
        return None
    try:
        return float(matches[-1])
    except ValueError:
        return None


class FFmpegSsimScorer:
    """PerceptualScorer backed by ffmpeg's ``ssim`` filter.

    Every failure (missing binary, non-zero exit, timeout, unparseable
    output) yields None rather than an exception.
    """

    def __init__(self, ffmpeg_path: Path | str = "ffmpeg", timeout: int = SSIM_TIMEOUT):
        self._ffmpeg_path = str(ffmpeg_path)
        self._timeout = timeout

    def build_command(self, original: Path, transcoded: Path) -> list[str]:
        """Return the ffmpeg argv comparing transcoded against original."""
        return [
            self._ffmpeg_path,
            "-hide_banner",
            "-nostats",
            "-i",
            str(transcoded),
            "-i",
            str(original),
            "-lavfi",
            "[0:v]setpts=PTS-STARTPTS[dist];[1:v]setpts=PTS-STARTPTS[ref];"
            "[dist][ref]ssim",
            "-f",
            "null",
            "-",
        ]

    def score(self, original: Path, transcoded: Path) -> float | None:
        cmd = self.build_command(original, transcoded)
        try:
            result = subprocess.run(  # nosec B603 - argv list, no shell
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("SSIM computation timed out after %ss", self._timeout)
            return None
        except OSError as e:
            logger.warning("SSIM computation could not start: %s", e)
            return None

        if result.returncode != 0:
            logger.warning(
                "SSIM computation failed (exit %d): %s",
                result.returncode,
                result.stderr.strip()[-500:],
            )
            return None

        value = parse_ssim_output(result.stderr)
        if value is None:
            logger.warning("Could not parse SSIM score from ffmpeg output")
        else:
            logger.debug("SSIM %s vs %s: %.4f", transcoded, original, value)
        return value


def measure_quality(
    scorer: PerceptualScorer | None, original: Path, transcoded: Path
) -> float | None:
    """Ask scorer for a score; a missing or failing scorer gives None."""
    if scorer is None:
        return None
    try:
        return scorer.score(original, transcoded)
    except Exception as e:
        logger.warning("Perceptual scorer failed, result unverified: %s", e)
        return None
