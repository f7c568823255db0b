"""CLI gate command: accept or revert an encoded file."""

import logging
import sys
from pathlib import Path

import click

from transcode_planner.cli.exit_codes import ExitCode
from transcode_planner.cli.formatting import (
    decision_to_dict,
    format_decision_human,
    format_json,
)
from transcode_planner.cli.options import resolve_intent
from transcode_planner.config import TPlanConfig
from transcode_planner.domain.models import MediaProbe
from transcode_planner.introspector import (
    FFprobeProber,
    StaticProber,
    analyze_probe,
)
from transcode_planner.introspector.interface import MediaProber
from transcode_planner.policy.exceptions import PlannerError
from transcode_planner.policy.gate import evaluate_gate
from transcode_planner.tools.ssim import (
    FFmpegSsimScorer,
    PerceptualScorer,
    measure_quality,
)

logger = logging.getLogger(__name__)


def _probe(path: Path, probe_json: Path | None, ffprobe: Path | None) -> MediaProbe:
    """Probe one side of the comparison, exiting on failure."""
    prober: MediaProber
    try:
        if probe_json is not None:
            prober = StaticProber.from_json_file(path, probe_json)
        else:
            if not path.exists():
                click.echo(f"Error: File not found: {path}", err=True)
                sys.exit(ExitCode.TARGET_NOT_FOUND)
            prober = FFprobeProber(ffprobe)
        size = path.stat().st_size if path.is_file() else None
        return analyze_probe(prober.probe(path), size, str(path))
    except PlannerError as e:
        click.echo(f"Error: Could not probe {path}", err=True)
        click.echo(f"Reason: {e}", err=True)
        sys.exit(ExitCode.PROBE_ERROR)


def _scorer(ctx: click.Context, config: TPlanConfig) -> PerceptualScorer:
    injected = ctx.obj.get("scorer")
    if injected is not None:
        return injected
    return FFmpegSsimScorer(config.tools.ffmpeg or "ffmpeg")


@click.command("gate")
@click.argument("original", type=click.Path(path_type=Path))
@click.argument("transcoded", type=click.Path(path_type=Path))
@click.option(
    "--original-json",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="Saved ffprobe JSON for ORIGINAL.",
)
@click.option(
    "--transcoded-json",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help="Saved ffprobe JSON for TRANSCODED.",
)
@click.option(
    "--score",
    type=float,
    default=None,
    help="Perceptual similarity score measured elsewhere (0-1).",
)
@click.option(
    "--measure-ssim",
    is_flag=True,
    help="Measure SSIM with ffmpeg (slow).",
)
@click.option(
    "--max-size-increase",
    type=float,
    default=None,
    help="Largest tolerated size increase in percent (0-50).",
)
@click.option(
    "--min-quality",
    type=float,
    default=None,
    help="Minimum perceptual score to accept (0.8-1.0).",
)
@click.option(
    "--intent",
    "intent_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file with quality intent fields.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def gate_command(
    ctx: click.Context,
    original: Path,
    transcoded: Path,
    original_json: Path | None,
    transcoded_json: Path | None,
    score: float | None,
    measure_ssim: bool,
    max_size_increase: float | None,
    min_quality: float | None,
    intent_path: Path | None,
    output_format: str,
) -> None:
    """Decide whether TRANSCODED replaces ORIGINAL.

    Without --score or --measure-ssim the decision rests on size alone and
    is reported as quality-unverified.

    Exit codes: 0 accepted, 60 reverted, 10 invalid thresholds,
    20 missing file, 51 probe errors.
    """
    if score is not None and measure_ssim:
        raise click.UsageError("--score and --measure-ssim are mutually exclusive")

    config: TPlanConfig = ctx.obj["config"]
    intent = resolve_intent(
        config.intent,
        intent_path,
        max_size_increase_percent=max_size_increase,
        min_quality_threshold=min_quality,
    )

    original_probe = _probe(original, original_json, config.tools.ffprobe)
    transcoded_probe = _probe(transcoded, transcoded_json, config.tools.ffprobe)

    if measure_ssim:
        score = measure_quality(_scorer(ctx, config), original, transcoded)

    try:
        decision = evaluate_gate(original_probe, transcoded_probe, intent, score)
    except PlannerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.PROBE_ERROR)

    if output_format == "json":
        data = decision_to_dict(decision)
        data["original"] = str(original)
        data["transcoded"] = str(transcoded)
        click.echo(format_json(data))
    else:
        click.echo(format_decision_human(decision))

    if not decision.accepted:
        sys.exit(ExitCode.REVERTED)
