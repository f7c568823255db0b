"""External tool adapters: capability detection, encoder selection, scoring."""

from transcode_planner.tools.detection import (
    HostCapabilities,
    StaticCapabilities,
    SystemCapabilities,
    find_tool,
)
from transcode_planner.tools.encoders import (
    candidate_chain,
    check_capability,
    select_encoder,
)
from transcode_planner.tools.ssim import (
    FFmpegSsimScorer,
    PerceptualScorer,
    measure_quality,
    parse_ssim_output,
)

__all__ = [
    "HostCapabilities",
    "SystemCapabilities",
    "StaticCapabilities",
    "find_tool",
    "candidate_chain",
    "check_capability",
    "select_encoder",
    "PerceptualScorer",
    "FFmpegSsimScorer",
    "parse_ssim_output",
    "measure_quality",
]
