"""Encoder family selection with hardware fallback.

Functions in this module:
- candidate_chain: Ordered encoder families considered for a GPU preference
- check_capability: Run one capability check, treating failures as absent
- select_encoder: Pick the first usable family from the chain
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from transcode_planner.domain.enums import EncoderFamily
from transcode_planner.domain.models import EncoderChoice
from transcode_planner.tools.detection import HostCapabilities

if TYPE_CHECKING:
    from transcode_planner.policy.intent import QualityIntent

logger = logging.getLogger(__name__)

GPU_FALLBACK_ORDER: tuple[EncoderFamily, ...] = (
    EncoderFamily.NVENC_HEVC,
    EncoderFamily.QSV_HEVC,
    EncoderFamily.SOFTWARE_X265,
)
SOFTWARE_ONLY: tuple[EncoderFamily, ...] = (EncoderFamily.SOFTWARE_X265,)


def candidate_chain(use_gpu: bool) -> tuple[EncoderFamily, ...]:
    """Return the ordered fallback chain for a GPU preference."""
    return GPU_FALLBACK_ORDER if use_gpu else SOFTWARE_ONLY


def check_capability(name: str, check: Callable[[], bool]) -> bool:
    """Run one capability check, treating any failure as absent."""
    try:
        return bool(check())
    except Exception as e:
        logger.warning("Capability check %s failed, treating as absent: %s", name, e)
        return False


def select_encoder(
    intent: "QualityIntent",
    capabilities: HostCapabilities,
) -> EncoderChoice:
    """Select the encoder family for a quality intent.

    When the intent does not request GPU encoding, no capability is probed
    and the software encoder is returned. Otherwise NVENC is checked first,
    then the QSV device, and the software encoder is the final fallback.

    Args:
        intent: Validated quality intent.
        capabilities: Host capability checks.

    Returns:
        EncoderChoice with the selected family and the considered chain.
        Never raises for missing hardware.
    """
    chain = candidate_chain(intent.use_gpu)

    if not intent.use_gpu:
        logger.debug("GPU not requested, using software encoder")
        return EncoderChoice(family=EncoderFamily.SOFTWARE_X265, candidates=chain)

    if check_capability("nvenc", capabilities.nvenc_available):
        family = EncoderFamily.NVENC_HEVC
    elif check_capability("qsv", capabilities.qsv_device_present):
        family = EncoderFamily.QSV_HEVC
    else:
        family = EncoderFamily.SOFTWARE_X265

    choice = EncoderChoice(
        family=family,
        candidates=chain,
        fallback_occurred=family is not chain[0],
    )
    if family.is_hardware:
        logger.info("Selected hardware encoder: %s", choice.encoder)
    else:
        logger.info("No hardware encoder available, using software encoder")
    return choice
