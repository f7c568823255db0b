"""Domain models for Transcode Planner.

Every model here is owned by a single pipeline run: it is created for one
file, never shared across files and never persisted.
"""

from dataclasses import dataclass

from transcode_planner.domain.enums import (
    EncoderFamily,
    GateReason,
    HDRType,
    PlanningMode,
    QualityTier,
    SkipReason,
    SpeedPreset,
)


@dataclass(frozen=True)
class MediaProbe:
    """Normalized facts about one media file, as needed for decisions."""

    has_video: bool
    codec: str | None
    width: int
    height: int
    duration_seconds: float
    file_size_bytes: int
    color_primaries: str | None = None
    color_transfer: str | None = None
    color_space: str | None = None

    @property
    def pixel_count(self) -> int:
        """Width times height of the primary video stream."""
        return self.width * self.height


@dataclass(frozen=True)
class QualityTierParams:
    """Static tier entry: base quality parameter and speed preset."""

    tier: QualityTier
    base_quality: int
    speed_preset: SpeedPreset


@dataclass(frozen=True)
class EncoderChoice:
    """Result of encoder selection."""

    family: EncoderFamily
    """Selected encoder family."""

    candidates: tuple[EncoderFamily, ...]
    """Ordered fallback chain that was considered."""

    fallback_occurred: bool = False
    """True if GPU was requested but a later candidate was chosen."""

    @property
    def encoder(self) -> str:
        """FFmpeg encoder name (e.g., 'hevc_nvenc', 'libx265')."""
        return self.family.encoder_name

    @property
    def encoder_type(self) -> str:
        """'hardware' or 'software'."""
        return "hardware" if self.family.is_hardware else "software"

    @property
    def remaining_fallbacks(self) -> tuple[EncoderFamily, ...]:
        """Candidates after the selected one, in order."""
        index = self.candidates.index(self.family)
        return self.candidates[index + 1 :]


@dataclass(frozen=True)
class BitrateAnalysis:
    """Derived bitrate figures for the size-reduction policy."""

    current_bitrate_kbps: float
    target_bitrate_kbps: float
    resolution_base_quality: int
    adjustment: int
    final_quality_param: int


@dataclass(frozen=True)
class HdrPassthrough:
    """Color metadata copied onto the encoded stream."""

    primaries: str
    transfer: str
    space: str

    @property
    def hdr_type(self) -> HDRType:
        """HDR type implied by the transfer function."""
        transfer = self.transfer.casefold()
        if transfer == "smpte2084":
            return HDRType.HDR10
        if transfer == "arib-std-b67":
            return HDRType.HLG
        return HDRType.NONE


@dataclass(frozen=True)
class EncodePlan:
    """Structured description of the encode an external executor runs."""

    encoder: EncoderChoice
    quality_param: int
    speed_preset: SpeedPreset
    container: str
    mode: PlanningMode
    target_codec: str = "hevc"
    copy_audio: bool = True
    copy_subtitles: bool = True
    hdr_passthrough: HdrPassthrough | None = None
    two_pass: bool = False
    requeue_after_encode: bool = True
    profile: str | None = "main10"
    fast_start: bool = True
    map_all_streams: bool = True
    bitrate: BitrateAnalysis | None = None
    info_log: str = ""


@dataclass(frozen=True)
class PlanSkip:
    """Pass the file through unchanged."""

    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True)
class GateDecision:
    """Accept or revert an encoded result."""

    accepted: bool
    reason: GateReason
    size_delta_percent: float
    perceptual_score: float | None = None

    @property
    def quality_verified(self) -> bool:
        """True only when a perceptual score confirmed the quality."""
        return self.reason is GateReason.QUALITY_VERIFIED
