"""Summary renderer for sweep and reconcile output."""

from assetcal.derived.synchronizer import ReconcileResult
from assetcal.reminders.sweep import SweepResult
from assetcal_cli.display.console import console


class SummaryRenderer:
    """Render job summaries printed after the sweep and reconcile commands."""

    def render_header(self, title: str) -> None:
        console.print()
        console.print("━" * 40)
        console.print(f"[bold]  {title}[/bold]")
        console.print("━" * 40)

    def render_sweep(self, result: SweepResult) -> None:
        """Render reminder sweep counters.

        Args:
            result: Outcome of one sweep run.
        """
        self.render_header("Reminder sweep")
        console.print(f"  Scanned:    {result.scanned}")
        console.print(f"  Created:    [green]{result.created}[/green]")
        console.print(f"  Duplicates: [dim]{result.duplicates}[/dim]")
        if result.failed:
            console.print(f"  Failed:     [red]{result.failed}[/red]")
        if result.truncated:
            console.print("  [yellow]Time budget exhausted; remaining events wait for the next run[/yellow]")

    def render_reconcile(self, result: ReconcileResult, asset_id: int) -> None:
        """Render derived-event reconcile counters."""
        self.render_header(f"Reminder events for asset {asset_id}")
        console.print(f"  Created: [green]{result.created}[/green]")
        console.print(f"  Updated: {result.updated}")
        for kind, message in result.errors.items():
            console.print(f"  [red]✗[/red] {kind}: {message}")
        if result.tabs is not None:
            console.print(f"  Tabs:    {', '.join(result.tabs)}")
