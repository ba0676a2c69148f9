"""CLI commands package."""

from assetcal_cli.commands.db import init_db_command
from assetcal_cli.commands.events import events_command
from assetcal_cli.commands.export import export_command
from assetcal_cli.commands.notifications import notifications_command
from assetcal_cli.commands.serve import serve_command
from assetcal_cli.commands.sweep import sweep_command
from assetcal_cli.commands.vehicles import reconcile_command, refresh_command

__all__ = [
    "events_command",
    "export_command",
    "init_db_command",
    "notifications_command",
    "reconcile_command",
    "refresh_command",
    "serve_command",
    "sweep_command",
]
