"""Configuration data models."""

from dataclasses import dataclass, field
from pathlib import Path

from transcode_planner.policy.intent import QualityIntent
from transcode_planner.policy.plan import DEFAULT_CONTAINER, DEFAULT_TARGET_CODEC
from transcode_planner.tools.detection import DEFAULT_NVIDIA_SMI, DEFAULT_QSV_DEVICE

LOG_LEVEL_NAMES = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


@dataclass
class ToolPathsConfig:
    """External tool locations.

    ffmpeg/ffprobe are looked up in PATH when unset.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None
    nvidia_smi: Path | str = DEFAULT_NVIDIA_SMI
    qsv_device: Path = DEFAULT_QSV_DEVICE


@dataclass
class PlannerConfig:
    """Planner output settings."""

    target_codec: str = DEFAULT_TARGET_CODEC
    container: str = DEFAULT_CONTAINER

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.target_codec.strip():
            raise ValueError("target_codec must not be empty")
        self.container = self.container.lstrip(".").lower()
        if not self.container:
            raise ValueError("container must not be empty")


@dataclass
class LoggingConfig:
    """Log destination and format.

    With no file, records go to stderr. include_stderr keeps stderr output
    when a file is set. The file rotates at max_bytes, keeping backup_count
    old files.
    """

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        self.level = self.level.lower()
        self.format = self.format.lower()
        if self.level not in LOG_LEVEL_NAMES:
            raise ValueError(
                f"Invalid log level {self.level!r}; expected one of "
                f"{', '.join(LOG_LEVEL_NAMES)}"
            )
        if self.format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format {self.format!r}; expected text or json"
            )
        if self.max_bytes <= 0 or self.backup_count < 0:
            raise ValueError("max_bytes must be positive and backup_count non-negative")


@dataclass
class TPlanConfig:
    """Complete resolved configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    intent: QualityIntent = field(default_factory=QualityIntent)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
