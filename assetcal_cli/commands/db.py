"""Create the database schema."""

import logging
import sys

import typer

from assetcal.exceptions import StoreError
from assetcal_cli.context import get_context

logger = logging.getLogger(__name__)


def init_db_command() -> None:
    """Create all tables in the configured database (safe to re-run)."""
    ctx = get_context()
    try:
        ctx.engine.database.create_all()
    except StoreError as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Database ready")
    print(f"  {ctx.config.database_url}")
