"""Display module for rendering CLI output.

- TableRenderer: Event and notification tables
- SummaryRenderer: Sweep and reconcile summaries
- console: Shared Rich console instance
"""

from assetcal_cli.display.console import console
from assetcal_cli.display.formatters import format_local, format_offset, format_relative_time
from assetcal_cli.display.summary_renderer import SummaryRenderer
from assetcal_cli.display.table_renderer import TableRenderer

__all__ = [
    "console",
    "SummaryRenderer",
    "TableRenderer",
    "format_local",
    "format_offset",
    "format_relative_time",
]
