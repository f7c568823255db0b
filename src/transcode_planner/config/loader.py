"""Resolve the tplan configuration from its layered sources.

Later layers win: built-in defaults, then ~/.tplan/config.toml, then
TPLAN_* environment variables. Command-line options are applied on top of
the result by the CLI (merge_intent for the intent, build_logging_config
for logging).

Environment variables:
- TPLAN_CONFIG_PATH: alternate config file location
- TPLAN_FFMPEG_PATH / TPLAN_FFPROBE_PATH: tool executables
- TPLAN_NVIDIA_SMI / TPLAN_QSV_DEVICE: hardware capability probes
- TPLAN_TARGET_CODEC / TPLAN_CONTAINER: planner output
- TPLAN_TIER, TPLAN_USE_GPU, TPLAN_PRESERVE_HDR, TPLAN_TARGET_REDUCTION,
  TPLAN_MIN_QUALITY, TPLAN_MAX_SIZE_INCREASE, TPLAN_MODE: intent defaults
- TPLAN_LOG_LEVEL, TPLAN_LOG_FILE, TPLAN_LOG_FORMAT, TPLAN_LOG_STDERR: logging
"""

from __future__ import annotations

import logging
from pathlib import Path

from transcode_planner.config.builder import (
    ConfigBuilder,
    source_from_env,
    source_from_file,
)
from transcode_planner.config.env import EnvReader
from transcode_planner.config.models import TPlanConfig
from transcode_planner.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".tplan"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Config file path, overridable by TPLAN_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    env_path = reader.get_str("TPLAN_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def get_config(
    config_path: Path | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> TPlanConfig:
    """Resolve the effective configuration.

    Args:
        config_path: Explicit config file; wins over TPLAN_CONFIG_PATH.
        env_reader: Environment to read; os.environ when None.
        strict: Raise instead of warning when the config file is malformed.

    Returns:
        The layered TPlanConfig.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        InvalidIntentError: If intent defaults are out of range.
        ValueError: If planner or logging values are invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_toml_file(path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    return builder.build()
