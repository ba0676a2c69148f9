"""Reconcile or refresh the MOT/tax reminder events of a vehicle."""

import logging
import sys

import typer
from typing_extensions import Annotated

from assetcal.exceptions import AccessDeniedError, AssetCalError, ValidationError
from assetcal_cli.context import get_context
from assetcal_cli.display import SummaryRenderer

logger = logging.getLogger(__name__)

AssetIdArg = Annotated[int, typer.Argument(min=1, help="Vehicle asset ID")]
UserOpt = Annotated[str, typer.Option("--user", "-u", help="Owner user ID")]


def reconcile_command(asset_id: AssetIdArg, user: UserOpt) -> None:
    """Sync reminder events with the expiry dates stored on the vehicle."""
    ctx = get_context()
    try:
        result = ctx.engine.sync_vehicle(asset_id, user)
    except AccessDeniedError:
        logger.error(f"Asset {asset_id} not found for user '{user}'")
        sys.exit(1)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)
    except AssetCalError as e:
        logger.error(f"Failed to sync reminder events: {e}")
        sys.exit(1)

    SummaryRenderer().render_reconcile(result, asset_id)
    if result.failed:
        sys.exit(1)


def refresh_command(asset_id: AssetIdArg, user: UserOpt) -> None:
    """
    Look up current MOT and tax dates, store them, then sync events.

    Uses the DVLA and MOT history services; sources without credentials
    are skipped.
    """
    ctx = get_context()
    try:
        result = ctx.engine.refresh_vehicle(asset_id, user)
    except AccessDeniedError:
        logger.error(f"Asset {asset_id} not found for user '{user}'")
        sys.exit(1)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    except AssetCalError as e:
        logger.error(f"Vehicle refresh failed: {e}")
        sys.exit(1)

    SummaryRenderer().render_reconcile(result, asset_id)
    if result.failed:
        sys.exit(1)
