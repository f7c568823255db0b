"""Host capability detection for hardware encoders.

The planner depends only on two boolean answers: is NVENC available, and is
a QSV render device present. How they are obtained is behind the
HostCapabilities protocol so selection can be exercised without hardware.
"""

import logging
import shutil
import subprocess  # nosec B404 - subprocess is required for nvidia-smi probing
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Timeout for capability detection commands (seconds)
DETECTION_TIMEOUT = 10

DEFAULT_NVIDIA_SMI = "nvidia-smi"
DEFAULT_QSV_DEVICE = Path("/dev/dri/renderD128")


class HostCapabilities(Protocol):
    """Boolean capability checks used by encoder selection.

    Implementations may raise; callers treat any exception as "absent".
    """

    def nvenc_available(self) -> bool:
        """Return True if an NVIDIA encoder can be used."""
        ...

    def qsv_device_present(self) -> bool:
        """Return True if an Intel Quick Sync render device exists."""
        ...


class SystemCapabilities:
    """Capability checks against the running host.

    NVENC is considered available when ``nvidia-smi`` exits successfully.
    QSV is considered present when the DRM render node exists.
    """

    def __init__(
        self,
        nvidia_smi: str | Path = DEFAULT_NVIDIA_SMI,
        qsv_device: Path = DEFAULT_QSV_DEVICE,
        timeout: int = DETECTION_TIMEOUT,
    ) -> None:
        self._nvidia_smi = str(nvidia_smi)
        self._qsv_device = qsv_device
        self._timeout = timeout

    def nvenc_available(self) -> bool:
        try:
            result = subprocess.run(  # nosec B603 - fixed argv, no shell
                [self._nvidia_smi],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s timed out after %ss", self._nvidia_smi, self._timeout)
            return False
        except OSError as e:
            logger.debug("%s not runnable: %s", self._nvidia_smi, e)
            return False
        return result.returncode == 0

    def qsv_device_present(self) -> bool:
        return self._qsv_device.exists()


@dataclass(frozen=True)
class StaticCapabilities:
    """Fixed capability answers, for tests and forced configurations."""

    nvenc: bool = False
    qsv: bool = False

    def nvenc_available(self) -> bool:
        return self.nvenc

    def qsv_device_present(self) -> bool:
        return self.qsv


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None
