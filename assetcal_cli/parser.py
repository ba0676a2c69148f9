"""Typer application and command routing."""

import typer
from typing_extensions import Annotated

from assetcal_cli import setup_logging
from assetcal_cli.commands import (
    events_command,
    export_command,
    init_db_command,
    notifications_command,
    reconcile_command,
    refresh_command,
    serve_command,
    sweep_command,
)
from assetcal_cli.context import CLIContext, set_context

app = typer.Typer(
    help="Asset calendar reminder engine.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show informational logging")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Set up logging and the shared context before any command runs."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    set_context(ctx)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)


app.command("init-db")(init_db_command)
app.command("sweep")(sweep_command)
app.command("reconcile")(reconcile_command)
app.command("refresh")(refresh_command)
app.command("events")(events_command)
app.command("notifications")(notifications_command)
app.command("export")(export_command)
app.command("serve")(serve_command)
