"""Run the reminder sweep once."""

import logging
import sys
from datetime import datetime, timedelta

import typer
from typing_extensions import Annotated

from assetcal.exceptions import StoreError
from assetcal_cli.context import get_context
from assetcal_cli.display import SummaryRenderer

logger = logging.getLogger(__name__)


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise typer.BadParameter(f"Invalid ISO timestamp: {value}") from e


def sweep_command(
    grace_minutes: Annotated[
        int | None,
        typer.Option("--grace-minutes", "-g", min=0, help="Grace window (default from config)"),
    ] = None,
    now: Annotated[
        str | None,
        typer.Option("--now", help="Evaluate as of this ISO timestamp instead of the current time"),
    ] = None,
) -> None:
    """
    Create notifications for reminder offsets that are due.

    Safe to run repeatedly: each (event, offset) produces at most one
    notification.
    """
    ctx = get_context()
    evaluated_at = _parse_now(now)
    grace_window = timedelta(minutes=grace_minutes) if grace_minutes is not None else None

    try:
        result = ctx.engine.run_sweep(now=evaluated_at, grace_window=grace_window)
    except StoreError as e:
        logger.error(f"Reminder sweep failed: {e}")
        sys.exit(1)

    if not ctx.quiet:
        SummaryRenderer().render_sweep(result)
