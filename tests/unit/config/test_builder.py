"""Tests for ConfigBuilder module."""

from __future__ import annotations

from pathlib import Path

import pytest

from transcode_planner.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from transcode_planner.config.env import EnvReader
from transcode_planner.domain.enums import PlanningMode, QualityTier
from transcode_planner.policy.exceptions import InvalidIntentError


class TestConfigSource:
    """Tests for ConfigSource dataclass."""

    def test_all_fields_default_to_none(self) -> None:
        """All fields should default to None."""
        source = ConfigSource()
        assert source.ffmpeg_path is None
        assert source.intent_tier is None
        assert source.logging_level is None


class TestConfigBuilder:
    """Tests for ConfigBuilder class."""

    def test_build_with_no_sources_uses_defaults(self) -> None:
        """Should use default values when no sources applied."""
        config = ConfigBuilder().build()

        assert config.tools.ffmpeg is None
        assert config.tools.nvidia_smi == "nvidia-smi"
        assert config.tools.qsv_device == Path("/dev/dri/renderD128")
        assert config.planner.target_codec == "hevc"
        assert config.planner.container == "mp4"
        assert config.intent.tier is QualityTier.HIGH
        assert config.logging.level == "info"

    def test_later_source_overrides(self) -> None:
        """Later sources win over earlier ones."""
        builder = ConfigBuilder()
        builder.apply(ConfigSource(intent_tier="archive", container="mkv"), "file")
        builder.apply(ConfigSource(intent_tier="efficient"), "env")
        config = builder.build()

        assert config.intent.tier is QualityTier.EFFICIENT
        assert config.planner.container == "mkv"

    def test_none_does_not_override(self) -> None:
        """None values never clear a lower source."""
        builder = ConfigBuilder()
        builder.apply(ConfigSource(intent_use_gpu=False))
        builder.apply(ConfigSource(intent_use_gpu=None))
        assert builder.build().intent.use_gpu is False

    def test_invalid_intent_raises(self) -> None:
        """Out-of-range intent values raise InvalidIntentError."""
        builder = ConfigBuilder()
        builder.apply(ConfigSource(intent_min_quality_threshold=0.5))
        with pytest.raises(InvalidIntentError):
            builder.build()

    def test_invalid_logging_raises(self) -> None:
        """Bad logging values raise ValueError."""
        builder = ConfigBuilder()
        builder.apply(ConfigSource(logging_level="verbose"))
        with pytest.raises(ValueError):
            builder.build()

    def test_container_normalized(self) -> None:
        """Leading dots and case are dropped from the container."""
        builder = ConfigBuilder()
        builder.apply(ConfigSource(container=".MKV"))
        assert builder.build().planner.container == "mkv"


class TestSourceFromFile:
    """Tests for source_from_file."""

    def test_sections(self) -> None:
        """Each TOML section maps onto its fields."""
        source = source_from_file(
            {
                "tools": {"ffmpeg": "/opt/ffmpeg", "nvidia_smi": "/opt/nvidia-smi"},
                "planner": {"container": "mkv"},
                "intent": {"tier": "balanced", "mode": "reduce"},
                "logging": {"level": "debug", "format": "json"},
            }
        )
        assert source.ffmpeg_path == Path("/opt/ffmpeg")
        assert source.nvidia_smi_path == "/opt/nvidia-smi"
        assert source.container == "mkv"
        assert source.intent_tier == "balanced"
        assert source.intent_mode == "reduce"
        assert source.logging_level == "debug"
        assert source.logging_format == "json"

    def test_empty(self) -> None:
        """An empty file gives an empty source."""
        assert source_from_file({}) == ConfigSource()


class TestSourceFromEnv:
    """Tests for source_from_env."""

    def test_intent_variables(self) -> None:
        """TPLAN_* intent variables are converted."""
        reader = EnvReader(
            env={
                "TPLAN_TIER": "archive",
                "TPLAN_USE_GPU": "no",
                "TPLAN_TARGET_REDUCTION": "60",
                "TPLAN_MODE": "reduce",
            }
        )
        builder = ConfigBuilder()
        builder.apply(source_from_env(reader), "env")
        intent = builder.build().intent

        assert intent.tier is QualityTier.ARCHIVE
        assert intent.use_gpu is False
        assert intent.target_reduction_percent == 60.0
        assert intent.mode is PlanningMode.SIZE_REDUCTION

    def test_logging_variables(self, tmp_path: Path) -> None:
        """Logging variables are read; the log file need not exist."""
        log_file = tmp_path / "logs" / "tplan.log"
        reader = EnvReader(
            env={"TPLAN_LOG_LEVEL": "warning", "TPLAN_LOG_FILE": str(log_file)}
        )
        source = source_from_env(reader)
        assert source.logging_level == "warning"
        assert source.logging_file == log_file

    def test_missing_tool_path_ignored(self, tmp_path: Path) -> None:
        """Tool paths that do not exist are ignored."""
        reader = EnvReader(env={"TPLAN_FFMPEG_PATH": str(tmp_path / "nope")})
        assert source_from_env(reader).ffmpeg_path is None
