"""FFprobe-based implementation of the MediaProber protocol."""

import json
import logging
import shutil
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path
from typing import Any

from transcode_planner.introspector.interface import MediaProbeError

logger = logging.getLogger(__name__)


class FFprobeProber:
    """ffprobe-based implementation of the MediaProber protocol."""

    def __init__(self, ffprobe_path: Path | None = None, timeout: int = 60) -> None:
        """Initialize the prober.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. If not provided,
                ffprobe is looked up on the system PATH.
            timeout: Seconds before a probe is abandoned.

        Raises:
            MediaProbeError: If ffprobe is not available.
        """
        if ffprobe_path is None:
            found = shutil.which("ffprobe")
            ffprobe_path = Path(found) if found else None
        if ffprobe_path is None:
            raise MediaProbeError(
                "ffprobe is not installed or not in PATH. "
                "Install ffmpeg or set TPLAN_FFPROBE_PATH / [tools] ffprobe "
                "in ~/.tplan/config.toml"
            )
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def probe(self, path: Path) -> dict[str, Any]:
        """Run ffprobe and return its parsed JSON document.

        Args:
            path: Path to the media file.

        Returns:
            Parsed JSON output from ffprobe.

        Raises:
            MediaProbeError: If the file is missing or ffprobe fails.
        """
        if not path.exists():
            raise MediaProbeError(f"File not found: {path}")

        try:
            result = subprocess.run(  # nosec B603 - argv list, no shell
                [
                    str(self._ffprobe_path),
                    "-v",
                    "error",
                    "-print_format",
                    "json",
                    "-show_streams",
                    "-show_format",
                    str(path),
                ],
                capture_output=True,
                text=True,
                errors="replace",
                check=True,
                timeout=self._timeout,
            )
            data = json.loads(result.stdout)
        except subprocess.TimeoutExpired as e:
            raise MediaProbeError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except subprocess.CalledProcessError as e:
            raise MediaProbeError(f"ffprobe failed for {path}: {e.stderr or e}") from e
        except json.JSONDecodeError as e:
            raise MediaProbeError(f"Invalid ffprobe output for {path}: {e}") from e

        if "streams" not in data or "format" not in data:
            raise MediaProbeError(
                f"Incomplete ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )
        logger.debug("Probed %s: %d streams", path, len(data["streams"]))
        return data
