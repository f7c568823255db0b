"""CLI plan command: decide how a file should be re-encoded."""

import logging
import shlex
import sys
from pathlib import Path

import click

from transcode_planner.cli.exit_codes import ExitCode
from transcode_planner.cli.formatting import (
    format_json,
    format_plan_human,
    format_skip_human,
    plan_to_dict,
    probe_to_dict,
    skip_to_dict,
)
from transcode_planner.cli.options import resolve_intent
from transcode_planner.config import TPlanConfig
from transcode_planner.domain.enums import FileState, QualityTier
from transcode_planner.executor.command import build_ffmpeg_commands, output_suffix
from transcode_planner.introspector import FFprobeProber, MediaProbeError, StaticProber
from transcode_planner.introspector.interface import MediaProber
from transcode_planner.tools.detection import HostCapabilities, SystemCapabilities
from transcode_planner.workflow import TranscodePipeline

logger = logging.getLogger(__name__)


def _capabilities(ctx: click.Context, config: TPlanConfig) -> HostCapabilities:
    """Capability checks from the context (tests) or the running host."""
    injected = ctx.obj.get("capabilities")
    if injected is not None:
        return injected
    return SystemCapabilities(
        nvidia_smi=config.tools.nvidia_smi,
        qsv_device=config.tools.qsv_device,
    )


@click.command("plan")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--probe-json",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="Use saved ffprobe JSON instead of running ffprobe.",
)
@click.option(
    "--intent",
    "intent_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file with quality intent fields.",
)
@click.option(
    "--tier",
    type=click.Choice([t.value for t in QualityTier], case_sensitive=False),
    default=None,
    help="Quality tier.",
)
@click.option("--gpu/--no-gpu", "use_gpu", default=None, help="Prefer GPU encoders.")
@click.option(
    "--preserve-hdr/--no-preserve-hdr",
    default=None,
    help="Carry HDR color metadata onto the encode.",
)
@click.option(
    "--reduction",
    type=float,
    default=None,
    help="Target size reduction percent (20-80).",
)
@click.option(
    "--mode",
    type=click.Choice(["fixed", "reduce"]),
    default=None,
    help="fixed: tier quality; reduce: bitrate-driven two-pass.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--show-command",
    is_flag=True,
    help="Also print the ffmpeg command line(s) for the plan.",
)
@click.pass_context
def plan_command(
    ctx: click.Context,
    file: Path,
    probe_json: Path | None,
    intent_path: Path | None,
    tier: str | None,
    use_gpu: bool | None,
    preserve_hdr: bool | None,
    reduction: float | None,
    mode: str | None,
    output_format: str,
    show_command: bool,
) -> None:
    """Plan the encode for a media file.

    FILE is the media file to plan. With --probe-json the file need not
    exist locally; the saved probe is used instead.

    Exit codes: 0 for a plan or a skip, 10 for an invalid intent,
    20 if FILE is missing, 30 if ffprobe is unavailable, 51 for probe errors.
    """
    config: TPlanConfig = ctx.obj["config"]
    intent = resolve_intent(
        config.intent,
        intent_path,
        tier=tier,
        use_gpu=use_gpu,
        preserve_hdr=preserve_hdr,
        target_reduction_percent=reduction,
        mode=mode,
    )

    prober: MediaProber
    if probe_json is not None:
        try:
            prober = StaticProber.from_json_file(file, probe_json)
        except MediaProbeError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.PROBE_ERROR)
    else:
        if not file.exists():
            click.echo(f"Error: File not found: {file}", err=True)
            sys.exit(ExitCode.TARGET_NOT_FOUND)
        try:
            prober = FFprobeProber(config.tools.ffprobe)
        except MediaProbeError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.TOOL_NOT_AVAILABLE)

    file_size = file.stat().st_size if file.is_file() else None

    pipeline = TranscodePipeline(
        intent,
        _capabilities(ctx, config),
        prober=prober,
        target_codec=config.planner.target_codec,
        container=config.planner.container,
    )
    outcome = pipeline.plan_file(file, file_size_bytes=file_size)

    if outcome.state is FileState.FAILED:
        click.echo(f"Error: Could not plan {file}", err=True)
        click.echo(f"Reason: {outcome.error}", err=True)
        sys.exit(ExitCode.PROBE_ERROR)

    commands: list[list[str]] = []
    if outcome.plan is not None and show_command:
        output_path = file.with_name(f"{file.stem}.tplan{output_suffix(outcome.plan)}")
        commands = build_ffmpeg_commands(
            outcome.plan,
            file,
            output_path,
            ffmpeg_path=config.tools.ffmpeg or "ffmpeg",
        )

    if output_format == "json":
        if outcome.plan is not None:
            data = plan_to_dict(outcome.plan)
        else:
            data = skip_to_dict(outcome.skip)
        data["file"] = str(file)
        data["probe"] = probe_to_dict(outcome.probe) if outcome.probe else None
        if show_command:
            data["commands"] = commands
        click.echo(format_json(data))
    else:
        click.echo(f"File: {file}")
        if outcome.plan is not None:
            click.echo(format_plan_human(outcome.plan))
        else:
            click.echo(format_skip_human(outcome.skip))
        for cmd in commands:
            click.echo(f"  $ {shlex.join(cmd)}")
