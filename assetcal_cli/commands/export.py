"""Export a user's events to ICS or JSON."""

import logging
import sys
from pathlib import Path

import typer
from typing_extensions import Annotated

from assetcal.output import WRITERS
from assetcal_cli.context import get_context

logger = logging.getLogger(__name__)


def export_command(
    user: Annotated[str, typer.Option("--user", "-u", help="Owner user ID")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Destination file"),
    ] = Path("assetcal.ics"),
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: ics or json"),
    ] = "ics",
) -> None:
    """
    Export all of a user's events.

    ICS output carries one alarm per reminder offset so the feed can be
    subscribed to from any calendar client.
    """
    writer_cls = WRITERS.get(format.lower())
    if writer_cls is None:
        logger.error(f"Unsupported output format: {format}")
        sys.exit(1)

    ctx = get_context()
    events = ctx.engine.calendar_events.list_for_user(user)

    try:
        writer_cls().write(events, output)
    except OSError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Exported {len(events)} events")
    print(f"  {output.resolve()}")
    logger.info(f"Exported {len(events)} events for '{user}' to {output}")
