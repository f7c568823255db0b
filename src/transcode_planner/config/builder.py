"""Configuration builder with explicit layering.

ConfigBuilder composes ConfigSources (file, environment, CLI) into a
TPlanConfig; later sources override earlier ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from transcode_planner.config.env import EnvReader
from transcode_planner.config.models import (
    LoggingConfig,
    PlannerConfig,
    ToolPathsConfig,
    TPlanConfig,
)
from transcode_planner.policy.intent import intent_from_dict
from transcode_planner.tools.detection import DEFAULT_NVIDIA_SMI, DEFAULT_QSV_DEVICE

logger = logging.getLogger(__name__)

# ConfigSource field prefix for QualityIntent fields
_INTENT_PREFIX = "intent_"


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None means "not specified here" and never overrides a lower source.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None
    nvidia_smi_path: Path | str | None = None
    qsv_device: Path | None = None

    # Planner
    target_codec: str | None = None
    container: str | None = None

    # Intent defaults
    intent_tier: str | None = None
    intent_use_gpu: bool | None = None
    intent_preserve_hdr: bool | None = None
    intent_target_reduction_percent: float | None = None
    intent_min_quality_threshold: float | None = None
    intent_max_size_increase_percent: float | None = None
    intent_mode: str | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds TPlanConfig by layering ConfigSources with precedence.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource, source_name: str | None = None) -> None:
        """Apply a source; its non-None values override existing ones."""
        applied = 0
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                applied += 1
        if applied:
            logger.debug(
                "Applied %d config values from %s", applied, source_name or "source"
            )

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> TPlanConfig:
        """Build the final TPlanConfig with defaults for unset values.

        Raises:
            InvalidIntentError: If intent values are out of range.
            ValueError: If planner or logging values are invalid.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
            nvidia_smi=self._get("nvidia_smi_path", DEFAULT_NVIDIA_SMI),
            qsv_device=self._get("qsv_device", DEFAULT_QSV_DEVICE),
        )
        planner = PlannerConfig(
            target_codec=self._get("target_codec", PlannerConfig.target_codec),
            container=self._get("container", PlannerConfig.container),
        )
        intent = intent_from_dict(
            {
                key[len(_INTENT_PREFIX) :]: value
                for key, value in self._values.items()
                if key.startswith(_INTENT_PREFIX)
            }
        )
        defaults = LoggingConfig()
        logging_config = LoggingConfig(
            level=self._get("logging_level", defaults.level),
            file=self._get("logging_file", defaults.file),
            format=self._get("logging_format", defaults.format),
            include_stderr=self._get("logging_include_stderr", defaults.include_stderr),
            max_bytes=self._get("logging_max_bytes", defaults.max_bytes),
            backup_count=self._get("logging_backup_count", defaults.backup_count),
        )
        return TPlanConfig(
            tools=tools, planner=planner, intent=intent, logging=logging_config
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed TOML config file."""
    tools = file_config.get("tools", {})
    planner = file_config.get("planner", {})
    intent = file_config.get("intent", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        # Tool paths
        ffmpeg_path=_optional_path(tools.get("ffmpeg")),
        ffprobe_path=_optional_path(tools.get("ffprobe")),
        nvidia_smi_path=tools.get("nvidia_smi"),
        qsv_device=_optional_path(tools.get("qsv_device")),
        # Planner
        target_codec=planner.get("target_codec"),
        container=planner.get("container"),
        # Intent
        intent_tier=intent.get("tier"),
        intent_use_gpu=intent.get("use_gpu"),
        intent_preserve_hdr=intent.get("preserve_hdr"),
        intent_target_reduction_percent=intent.get("target_reduction_percent"),
        intent_min_quality_threshold=intent.get("min_quality_threshold"),
        intent_max_size_increase_percent=intent.get("max_size_increase_percent"),
        intent_mode=intent.get("mode"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from TPLAN_* environment variables."""
    return ConfigSource(
        # Tool paths
        ffmpeg_path=reader.get_path("TPLAN_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("TPLAN_FFPROBE_PATH"),
        nvidia_smi_path=reader.get_str("TPLAN_NVIDIA_SMI"),
        qsv_device=reader.get_path("TPLAN_QSV_DEVICE", must_exist=False),
        # Planner
        target_codec=reader.get_str("TPLAN_TARGET_CODEC"),
        container=reader.get_str("TPLAN_CONTAINER"),
        # Intent
        intent_tier=reader.get_str("TPLAN_TIER"),
        intent_use_gpu=reader.get_bool("TPLAN_USE_GPU"),
        intent_preserve_hdr=reader.get_bool("TPLAN_PRESERVE_HDR"),
        intent_target_reduction_percent=reader.get_float("TPLAN_TARGET_REDUCTION"),
        intent_min_quality_threshold=reader.get_float("TPLAN_MIN_QUALITY"),
        intent_max_size_increase_percent=reader.get_float("TPLAN_MAX_SIZE_INCREASE"),
        intent_mode=reader.get_str("TPLAN_MODE"),
        # Logging
        logging_level=reader.get_str("TPLAN_LOG_LEVEL"),
        logging_file=reader.get_path("TPLAN_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("TPLAN_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("TPLAN_LOG_STDERR"),
        logging_max_bytes=None,
        logging_backup_count=None,
    )
