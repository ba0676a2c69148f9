"""Derived calendar events kept in sync with tracked expiry dates."""

from assetcal.derived.synchronizer import (
    DerivedEventRegistry,
    DerivedEventSpec,
    DerivedEventSynchronizer,
    ReconcileResult,
)
from assetcal.derived.vehicle import (
    MOT_SPEC,
    TAX_SPEC,
    VEHICLE_REMINDERS,
    default_registry,
    sync_vehicle_reminders,
    vehicle_tracked_expiries,
)

__all__ = [
    "DerivedEventRegistry",
    "DerivedEventSpec",
    "DerivedEventSynchronizer",
    "ReconcileResult",
    "MOT_SPEC",
    "TAX_SPEC",
    "VEHICLE_REMINDERS",
    "default_registry",
    "sync_vehicle_reminders",
    "vehicle_tracked_expiries",
]
