"""Intent options shared by the plan and gate commands."""

import sys
from pathlib import Path
from typing import Any

import click

from transcode_planner.cli.exit_codes import ExitCode
from transcode_planner.policy.exceptions import InvalidIntentError
from transcode_planner.policy.intent import QualityIntent, load_intent, merge_intent


def resolve_intent(
    base: QualityIntent,
    intent_path: Path | None,
    **overrides: Any,
) -> QualityIntent:
    """Apply an intent file and CLI overrides, exiting on invalid values.

    Precedence: CLI overrides > intent file > configured intent.
    """
    try:
        intent = base
        if intent_path is not None:
            intent = load_intent(intent_path, base)
        return merge_intent(intent, **overrides)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)
    except InvalidIntentError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.INTENT_VALIDATION_ERROR)
