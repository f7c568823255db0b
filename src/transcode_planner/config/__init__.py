"""Configuration management for Transcode Planner.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (TPLAN_*)
3. Config file (~/.tplan/config.toml)
4. Default values (lowest priority)
"""

from transcode_planner.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from transcode_planner.config.env import EnvReader
from transcode_planner.config.loader import get_config, get_default_config_path
from transcode_planner.config.logging_factory import build_logging_config
from transcode_planner.config.models import (
    LoggingConfig,
    PlannerConfig,
    ToolPathsConfig,
    TPlanConfig,
)
from transcode_planner.config.toml_parser import (
    TomlParseError,
    load_toml_file,
    parse_toml,
)

__all__ = [
    "TPlanConfig",
    "ToolPathsConfig",
    "PlannerConfig",
    "LoggingConfig",
    "get_config",
    "get_default_config_path",
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
]
