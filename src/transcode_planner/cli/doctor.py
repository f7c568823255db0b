"""tplan doctor command for checking host capabilities.

Reports ffmpeg/ffprobe availability and which encoder family the planner
would select on this host.
"""

import sys

import click

from transcode_planner.cli.exit_codes import ExitCode
from transcode_planner.cli.formatting import format_json
from transcode_planner.config import TPlanConfig
from transcode_planner.policy.intent import merge_intent
from transcode_planner.tools.detection import (
    StaticCapabilities,
    SystemCapabilities,
    find_tool,
)
from transcode_planner.tools.encoders import check_capability, select_encoder


def _format_status(available: bool) -> str:
    """Format status for display."""
    return "✓" if available else "✗"


@click.command("doctor")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def doctor_command(ctx: click.Context, json_output: bool) -> None:
    """Check tool availability and hardware encoder capabilities.

    Exit codes:
      0 - ffprobe available
      30 - ffprobe missing (planning from live files is impossible)
    """
    config: TPlanConfig = ctx.obj["config"]
    capabilities = ctx.obj.get("capabilities") or SystemCapabilities(
        nvidia_smi=config.tools.nvidia_smi,
        qsv_device=config.tools.qsv_device,
    )

    ffprobe = find_tool("ffprobe", config.tools.ffprobe)
    ffmpeg = find_tool("ffmpeg", config.tools.ffmpeg)
    nvenc = check_capability("nvenc", capabilities.nvenc_available)
    qsv = check_capability("qsv", capabilities.qsv_device_present)
    # Reuse the answers above so each check runs once
    gpu_choice = select_encoder(
        merge_intent(config.intent, use_gpu=True),
        StaticCapabilities(nvenc=nvenc, qsv=qsv),
    )

    if json_output:
        click.echo(
            format_json(
                {
                    "ffprobe": str(ffprobe) if ffprobe else None,
                    "ffmpeg": str(ffmpeg) if ffmpeg else None,
                    "nvenc": nvenc,
                    "qsv": qsv,
                    "gpu_encoder": gpu_choice.encoder,
                    "gpu_fallback": gpu_choice.fallback_occurred,
                }
            )
        )
    else:
        click.echo("Transcode Planner Health Check")
        click.echo("=" * 40)
        click.echo(
            f"  {_format_status(ffprobe is not None)} ffprobe: "
            f"{ffprobe or 'not found'}"
        )
        click.echo(
            f"  {_format_status(ffmpeg is not None)} ffmpeg:  "
            f"{ffmpeg or 'not found'}"
        )
        click.echo(f"  {_format_status(nvenc)} NVENC")
        click.echo(f"  {_format_status(qsv)} QSV ({config.tools.qsv_device})")
        click.echo(f"  GPU encoding would use: {gpu_choice.encoder}")

    if ffprobe is None:
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
