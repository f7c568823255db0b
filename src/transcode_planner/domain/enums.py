"""Domain enums for Transcode Planner.

Closed enumerations used by every planning stage. Free-form strings coming
from configuration are mapped onto these before any decision is made.
"""

from enum import Enum


class QualityTier(Enum):
    """Named quality intent, from strictest to most compressed."""

    ARCHIVE = "archive"
    HIGH = "high"
    BALANCED = "balanced"
    EFFICIENT = "efficient"


class SpeedPreset(Enum):
    """x265-style encoding speed preset (fastest to slowest)."""

    ULTRAFAST = "ultrafast"
    SUPERFAST = "superfast"
    VERYFAST = "veryfast"
    FASTER = "faster"
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"
    SLOWER = "slower"
    VERYSLOW = "veryslow"


class EncoderFamily(Enum):
    """HEVC encoder family."""

    NVENC_HEVC = "nvenc_hevc"  # NVIDIA NVENC
    QSV_HEVC = "qsv_hevc"  # Intel Quick Sync Video
    SOFTWARE_X265 = "software_x265"  # libx265 on the CPU

    @property
    def encoder_name(self) -> str:
        """FFmpeg encoder name for this family."""
        return _ENCODER_NAMES[self]

    @property
    def is_hardware(self) -> bool:
        """True for GPU-backed families."""
        return self is not EncoderFamily.SOFTWARE_X265


_ENCODER_NAMES: dict[EncoderFamily, str] = {
    EncoderFamily.NVENC_HEVC: "hevc_nvenc",
    EncoderFamily.QSV_HEVC: "hevc_qsv",
    EncoderFamily.SOFTWARE_X265: "libx265",
}


class PlanningMode(Enum):
    """Which policy produces the quality parameter.

    FIXED_QUALITY uses the tier table; SIZE_REDUCTION uses the
    resolution-aware bitrate planner and two-pass encoding.
    """

    FIXED_QUALITY = "fixed"
    SIZE_REDUCTION = "reduce"


class HDRType(Enum):
    """Type of HDR content, derived from the color transfer function."""

    NONE = "none"
    HDR10 = "hdr10"  # PQ transfer (smpte2084)
    HLG = "hlg"  # Hybrid Log-Gamma (arib-std-b67)


class SkipReason(Enum):
    """Why a file is passed through without a plan."""

    NO_VIDEO_STREAM = "no-video-stream"
    ALREADY_TARGET_CODEC = "already-target-codec"


class GateReason(Enum):
    """Outcome reason attached to a gate decision."""

    SIZE_REGRESSION = "size-regression"
    QUALITY_REGRESSION = "quality-regression"
    QUALITY_VERIFIED = "quality-verified"
    QUALITY_UNVERIFIED = "quality-unverified"


class FileState(Enum):
    """Per-file pipeline state.

    State transitions:
        probed → planned
        planned → skipped          (terminal)
        planned → plan_ready
        plan_ready → awaiting_external_encode
        awaiting_external_encode → accepted   (terminal)
        awaiting_external_encode → reverted   (terminal)
        any non-terminal → failed  (terminal, fatal typed error)
    """

    PROBED = "probed"
    PLANNED = "planned"
    SKIPPED = "skipped"
    PLAN_READY = "plan_ready"
    AWAITING_EXTERNAL_ENCODE = "awaiting_external_encode"
    ACCEPTED = "accepted"
    REVERTED = "reverted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """True if no further transition is possible."""
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {FileState.SKIPPED, FileState.ACCEPTED, FileState.REVERTED, FileState.FAILED}
)
