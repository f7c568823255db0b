"""CLI module for Transcode Planner."""

import logging
import sys
from pathlib import Path

import click

from transcode_planner.cli.exit_codes import ExitCode
from transcode_planner.config import (
    TomlParseError,
    build_logging_config,
    get_config,
)
from transcode_planner.logging import configure_logging
from transcode_planner.policy.exceptions import InvalidIntentError

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="transcode-planner")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.tplan/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """Transcode Planner - plan HEVC re-encodes and gate their results."""
    ctx.ensure_object(dict)

    # Preserve a config injected by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=True)
        except InvalidIntentError as e:
            click.echo(f"Error: invalid [intent] configuration: {e}", err=True)
            sys.exit(ExitCode.INTENT_VALIDATION_ERROR)
        except (TomlParseError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)

    config = ctx.obj["config"]
    try:
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)
    logger.debug(
        "tplan starting: log_level=%s, log_file=%s",
        logging_config.level,
        logging_config.file or "stderr",
    )


# Defer import to avoid circular dependency
def _register_commands():
    from transcode_planner.cli.doctor import doctor_command
    from transcode_planner.cli.gate import gate_command
    from transcode_planner.cli.plan import plan_command
    from transcode_planner.cli.tiers import tiers_command

    main.add_command(plan_command)
    main.add_command(gate_command)
    main.add_command(tiers_command)
    main.add_command(doctor_command)


_register_commands()
