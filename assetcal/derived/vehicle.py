"""Vehicle MOT and tax expiry reminders."""

import logging
from typing import Any

from assetcal.derived.synchronizer import (
    DerivedEventRegistry,
    DerivedEventSpec,
    DerivedEventSynchronizer,
    ReconcileResult,
)
from assetcal.exceptions import AccessDeniedError, ValidationError
from assetcal.models.asset import Asset
from assetcal.time_utils import parse_expiry_date

logger = logging.getLogger(__name__)

MOT_KIND = "mot"
TAX_KIND = "tax"

MOT_SPEC = DerivedEventSpec(
    kind=MOT_KIND,
    label="MOT",
    legacy_marker="[AUTO:vehicle_mot_reminder]",
)
TAX_SPEC = DerivedEventSpec(
    kind=TAX_KIND,
    label="Tax",
    legacy_marker="[AUTO:vehicle_tax_reminder]",
)

VEHICLE_REMINDERS = MOT_SPEC.default_reminders()


def default_registry() -> DerivedEventRegistry:
    """Registry with the vehicle kinds."""
    return DerivedEventRegistry([MOT_SPEC, TAX_SPEC])


def vehicle_tracked_expiries(asset: Asset) -> dict[str, Any]:
    """Read ``metadata.maintenance.{mot,tax}.expires`` from a vehicle asset."""
    return {
        MOT_KIND: asset.maintenance_entry(MOT_KIND).get("expires"),
        TAX_KIND: asset.maintenance_entry(TAX_KIND).get("expires"),
    }


def sync_vehicle_reminders(
    synchronizer: DerivedEventSynchronizer,
    asset_id: int,
    user_id: str,
) -> ReconcileResult:
    """
    Reconcile the MOT/tax events of a vehicle owned by ``user_id``.

    Args:
        synchronizer: Synchronizer wired to the stores
        asset_id: Vehicle asset
        user_id: Acting user

    Returns:
        ReconcileResult (all zero when the vehicle has no expiry dates)

    Raises:
        AccessDeniedError: If the asset does not exist or is not owned
        ValidationError: If the asset is not a vehicle
        StoreError: If the asset's events cannot be loaded
    """
    asset = synchronizer.asset_store.get_asset(asset_id, user_id)
    if asset is None:
        raise AccessDeniedError(f"Asset {asset_id} not found")
    if not asset.is_vehicle:
        raise ValidationError(f"Asset {asset_id} is not a vehicle")

    expiries = vehicle_tracked_expiries(asset)
    if not any(parse_expiry_date(v, synchronizer.tz) for v in expiries.values()):
        logger.debug(f"Vehicle {asset_id} has no expiry dates to sync")
        return ReconcileResult()

    return synchronizer.reconcile(asset_id, user_id, expiries)
