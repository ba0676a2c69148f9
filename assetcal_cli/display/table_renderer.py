"""Table renderer for event and notification lists."""

from datetime import tzinfo

from rich.table import Table

from assetcal.models.event import CalendarEvent
from assetcal.models.notification import NotificationRecord
from assetcal_cli.display.console import console
from assetcal_cli.display.formatters import format_local, format_offset, format_relative_time


class TableRenderer:
    """Render tables for events and notifications.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_events(self, events: list[CalendarEvent], tz: tzinfo) -> None:
        """Render events as a table.

        Args:
            events: Events to display, already ordered.
            tz: Zone used to display start and end.
        """
        if not events:
            console.print("No events found")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("ID", style="dim", justify="right")
        table.add_column("NAME", style="cyan")
        table.add_column("START")
        table.add_column("END", style="dim")
        table.add_column("ASSET", justify="right")
        table.add_column("REMINDERS")
        table.add_column("ORIGIN", style="dim")

        for event in events:
            overrides = event.reminders.overrides if event.reminders else []
            reminders = ", ".join(format_offset(o.minutes) for o in overrides) or "-"
            name = event.name
            if event.is_derived:
                name += " [yellow](auto)[/yellow]"
            table.add_row(
                str(event.id),
                name,
                format_local(event.start, tz),
                format_local(event.end, tz),
                str(event.asset_id) if event.asset_id is not None else "-",
                reminders,
                event.origin,
            )

        console.print(table)

    def render_notifications(self, records: list[NotificationRecord]) -> None:
        """Render notifications as a table, unread ones highlighted."""
        if not records:
            console.print("No notifications")
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("ID", style="dim", justify="right")
        table.add_column("TITLE")
        table.add_column("TYPE", style="dim")
        table.add_column("CREATED", style="dim")

        for record in records:
            title = record.title if record.read else f"[bold]{record.title}[/bold]"
            table.add_row(
                str(record.id),
                title,
                record.type,
                format_relative_time(record.created_at),
            )

        console.print(table)
