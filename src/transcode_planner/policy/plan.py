"""Encode plan assembly.

Combines the encoder choice, quality parameter and speed preset with
the probe and intent into a structured EncodePlan, or a PlanSkip when the
file should pass through unchanged.
"""

import logging

from transcode_planner.domain.enums import (
    EncoderFamily,
    PlanningMode,
    SkipReason,
    SpeedPreset,
)
from transcode_planner.domain.models import (
    BitrateAnalysis,
    EncodePlan,
    EncoderChoice,
    HdrPassthrough,
    MediaProbe,
    PlanSkip,
)
from transcode_planner.policy.codecs import video_codec_matches
from transcode_planner.policy.intent import QualityIntent

logger = logging.getLogger(__name__)

DEFAULT_TARGET_CODEC = "hevc"
DEFAULT_CONTAINER = "mp4"

# Used when primaries are tagged but transfer/space are not
DEFAULT_HDR_TRANSFER = "smpte2084"
DEFAULT_HDR_SPACE = "bt2020nc"

# 10-bit Main profile; the QSV encoder picks its own profile
MAIN10_FAMILIES = frozenset({EncoderFamily.NVENC_HEVC, EncoderFamily.SOFTWARE_X265})


def build_hdr_passthrough(
    probe: MediaProbe, preserve_hdr: bool
) -> HdrPassthrough | None:
    """Return HDR color metadata to carry over, or None.

    Metadata is carried only when preservation is requested and the probe
    reports color primaries. Missing transfer and space take HDR10 defaults.
    """
    if not preserve_hdr or not probe.color_primaries:
        return None
    return HdrPassthrough(
        primaries=probe.color_primaries,
        transfer=probe.color_transfer or DEFAULT_HDR_TRANSFER,
        space=probe.color_space or DEFAULT_HDR_SPACE,
    )


def check_skip(
    probe: MediaProbe, target_codec: str = DEFAULT_TARGET_CODEC
) -> PlanSkip | None:
    """Return a PlanSkip if the file needs no encode, else None."""
    if not probe.has_video:
        return PlanSkip(SkipReason.NO_VIDEO_STREAM, "no video stream present")
    if video_codec_matches(probe.codec, target_codec):
        return PlanSkip(
            SkipReason.ALREADY_TARGET_CODEC,
            f"video is already {probe.codec}",
        )
    return None


def _info_log(
    intent: QualityIntent,
    encoder: EncoderChoice,
    quality_param: int,
    hdr: HdrPassthrough | None,
) -> str:
    if intent.mode is PlanningMode.SIZE_REDUCTION:
        summary = (
            f"Size reduction targeting {intent.target_reduction_percent:g}% "
            f"smaller file"
        )
    else:
        summary = f"Smart HEVC encoding with {intent.tier.value} quality preset"
    details = f"{encoder.encoder}, quality {quality_param}"
    if hdr is not None:
        details += f", {hdr.hdr_type.value} passthrough"
    return f"{summary} ({details})"


def build_encode_plan(
    probe: MediaProbe,
    encoder: EncoderChoice,
    quality_param: int,
    speed_preset: SpeedPreset,
    intent: QualityIntent,
    bitrate: BitrateAnalysis | None = None,
    target_codec: str = DEFAULT_TARGET_CODEC,
    container: str = DEFAULT_CONTAINER,
) -> EncodePlan | PlanSkip:
    """Assemble the encode plan for one file.

    Args:
        probe: Normalized probe of the source file.
        encoder: Selected encoder family.
        quality_param: CRF-equivalent quality parameter.
        speed_preset: Encoder speed preset.
        intent: Validated quality intent; its mode decides two-pass.
        bitrate: Bitrate analysis when planning in size-reduction mode.
        target_codec: Codec the encode produces.
        container: Output container extension, without the dot.

    Returns:
        PlanSkip when there is no video or the video is already the target
        codec, otherwise an immutable EncodePlan.
    """
    skip = check_skip(probe, target_codec)
    if skip is not None:
        logger.info("Skipping encode: %s", skip.detail)
        return skip

    hdr = build_hdr_passthrough(probe, intent.preserve_hdr)
    plan = EncodePlan(
        encoder=encoder,
        quality_param=quality_param,
        speed_preset=speed_preset,
        container=container,
        mode=intent.mode,
        target_codec=target_codec,
        copy_audio=True,
        copy_subtitles=True,
        hdr_passthrough=hdr,
        two_pass=intent.mode is PlanningMode.SIZE_REDUCTION,
        requeue_after_encode=True,
        profile="main10" if encoder.family in MAIN10_FAMILIES else None,
        fast_start=True,
        map_all_streams=True,
        bitrate=bitrate,
        info_log=_info_log(intent, encoder, quality_param, hdr),
    )
    logger.info("Planned encode: %s", plan.info_log)
    return plan
