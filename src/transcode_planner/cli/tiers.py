"""CLI tiers command: show the quality tier table."""

import click

from transcode_planner.cli.formatting import format_json
from transcode_planner.policy.presets import DEFAULT_TIER, QUALITY_TIER_PARAMS


@click.command("tiers")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
def tiers_command(output_format: str) -> None:
    """List quality tiers with their quality parameter and speed preset."""
    if output_format == "json":
        data = {
            "default": DEFAULT_TIER.value,
            "tiers": [
                {
                    "tier": params.tier.value,
                    "base_quality": params.base_quality,
                    "speed_preset": params.speed_preset.value,
                }
                for params in QUALITY_TIER_PARAMS.values()
            ],
        }
        click.echo(format_json(data))
        return

    click.echo(f"{'Tier':<12}{'Quality':>8}  Preset")
    for params in QUALITY_TIER_PARAMS.values():
        marker = " (default)" if params.tier is DEFAULT_TIER else ""
        click.echo(
            f"{params.tier.value:<12}{params.base_quality:>8}  "
            f"{params.speed_preset.value}{marker}"
        )
