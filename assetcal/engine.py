"""Wires stores, the sweep and the synchronizer around one database."""

import copy
from typing import Optional

from assetcal.config import AssetCalConfig
from assetcal.derived import (
    DerivedEventRegistry,
    DerivedEventSynchronizer,
    ReconcileResult,
    default_registry,
    sync_vehicle_reminders,
)
from assetcal.exceptions import AccessDeniedError, ValidationError
from assetcal.lookup import VehicleLookupService
from assetcal.reminders import ReminderSweep, SweepResult
from assetcal.services import CalendarEventService, NotificationService
from assetcal.storage import Database, SqlAssetStore, SqlEventStore, SqlNotificationStore
from assetcal.time_utils import utc_now


class AssetCalEngine:
    """Lazy-initialized dependencies shared by the HTTP app and the CLI.

    Usage:
        engine = AssetCalEngine(AssetCalConfig.from_env())
        result = engine.run_sweep()
    """

    def __init__(
        self,
        config: AssetCalConfig,
        database: Optional[Database] = None,
        registry: Optional[DerivedEventRegistry] = None,
        lookup: Optional[VehicleLookupService] = None,
    ):
        self.config = config
        self._database = database
        self._registry = registry
        self._lookup = lookup

        self._event_store: SqlEventStore | None = None
        self._notification_store: SqlNotificationStore | None = None
        self._asset_store: SqlAssetStore | None = None
        self._synchronizer: DerivedEventSynchronizer | None = None

    @property
    def database(self) -> Database:
        """Get database (lazy-loaded, schema created on first use)."""
        if self._database is None:
            database = Database(self.config.database_url)
            database.create_all()
            self._database = database
        return self._database

    @property
    def event_store(self) -> SqlEventStore:
        if self._event_store is None:
            self._event_store = SqlEventStore(self.database)
        return self._event_store

    @property
    def notification_store(self) -> SqlNotificationStore:
        if self._notification_store is None:
            self._notification_store = SqlNotificationStore(self.database)
        return self._notification_store

    @property
    def asset_store(self) -> SqlAssetStore:
        if self._asset_store is None:
            self._asset_store = SqlAssetStore(self.database)
        return self._asset_store

    @property
    def registry(self) -> DerivedEventRegistry:
        if self._registry is None:
            self._registry = default_registry()
        return self._registry

    @property
    def synchronizer(self) -> DerivedEventSynchronizer:
        """Get derived-event synchronizer (lazy-loaded)."""
        if self._synchronizer is None:
            self._synchronizer = DerivedEventSynchronizer(
                self.event_store,
                self.asset_store,
                self.config.tzinfo,
                self.registry,
            )
        return self._synchronizer

    @property
    def lookup(self) -> VehicleLookupService:
        """Get vehicle lookup service (lazy-loaded)."""
        if self._lookup is None:
            self._lookup = VehicleLookupService.from_config(self.config)
        return self._lookup

    @property
    def calendar_events(self) -> CalendarEventService:
        return CalendarEventService(self.event_store, self.asset_store)

    @property
    def notifications(self) -> NotificationService:
        return NotificationService(self.notification_store)

    def sweep(self) -> ReminderSweep:
        """New sweep job bounded by the configured wall-clock budget."""
        return ReminderSweep(
            self.event_store,
            self.notification_store,
            max_duration_seconds=self.config.sweep_max_duration_seconds,
        )

    def run_sweep(self, now=None, grace_window=None) -> SweepResult:
        """Run one reminder sweep with configured defaults."""
        return self.sweep().run(
            now or utc_now(),
            grace_window if grace_window is not None else self.config.grace_window,
        )

    def sync_vehicle(self, asset_id: int, user_id: str) -> ReconcileResult:
        """Reconcile MOT/tax events for one vehicle."""
        return sync_vehicle_reminders(self.synchronizer, asset_id, user_id)

    def refresh_vehicle(self, asset_id: int, user_id: str) -> ReconcileResult:
        """
        Look up current expiry dates, store them on the asset, then reconcile.

        Dates the sources do not return are left untouched in the metadata.

        Raises:
            AccessDeniedError: If the asset does not exist or is not owned
            ValidationError: If the asset is not a vehicle or has no registration
            VehicleLookupError: If a configured data source fails
        """
        asset = self.asset_store.get_asset(asset_id, user_id)
        if asset is None:
            raise AccessDeniedError(f"Asset {asset_id} not found")
        if not asset.is_vehicle:
            raise ValidationError(f"Asset {asset_id} is not a vehicle")
        if not asset.registration_number:
            raise ValidationError(f"Vehicle {asset_id} has no registration number")

        expiries = self.lookup.fetch_expiries(asset.registration_number)

        metadata = copy.deepcopy(asset.metadata)
        maintenance = metadata.get("maintenance")
        if not isinstance(maintenance, dict):
            maintenance = {}
        for kind, day in expiries.items():
            if day is None:
                continue
            entry = maintenance.get(kind)
            entry = dict(entry) if isinstance(entry, dict) else {}
            entry["expires"] = day.isoformat()
            maintenance[kind] = entry
        metadata["maintenance"] = maintenance
        self.asset_store.update_asset(asset_id, {"metadata": metadata}, user_id)

        return self.sync_vehicle(asset_id, user_id)
