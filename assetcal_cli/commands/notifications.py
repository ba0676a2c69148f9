"""List notifications."""

import typer
from typing_extensions import Annotated

from assetcal.constants import NOTIFICATION_LIST_LIMIT
from assetcal_cli.context import get_context
from assetcal_cli.display import TableRenderer


def notifications_command(
    user: Annotated[str, typer.Option("--user", "-u", help="Owner user ID")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum notifications to show"),
    ] = NOTIFICATION_LIST_LIMIT,
) -> None:
    """List a user's notifications, newest first."""
    ctx = get_context()
    records = ctx.engine.notifications.list_for_user(user, limit)
    TableRenderer().render_notifications(records)
