"""List calendar events."""

import logging
import sys

import typer
from typing_extensions import Annotated

from assetcal.exceptions import AccessDeniedError
from assetcal_cli.context import get_context
from assetcal_cli.display import TableRenderer

logger = logging.getLogger(__name__)


def events_command(
    user: Annotated[str, typer.Option("--user", "-u", help="Owner user ID")],
    asset: Annotated[
        int | None,
        typer.Option("--asset", "-a", min=1, help="Only events of this asset"),
    ] = None,
) -> None:
    """List a user's events ordered by start."""
    ctx = get_context()
    service = ctx.engine.calendar_events
    try:
        if asset is not None:
            events = service.list_for_asset(asset, user)
        else:
            events = service.list_for_user(user)
    except AccessDeniedError:
        logger.error(f"Asset {asset} not found for user '{user}'")
        sys.exit(1)

    TableRenderer().render_events(events, ctx.config.tzinfo)
