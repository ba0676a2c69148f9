"""Tests for engine wiring and vehicle refresh."""

from datetime import date, timedelta

import pytest

from assetcal.engine import AssetCalEngine
from assetcal.exceptions import AccessDeniedError, ValidationError, VehicleLookupError
from tests.conftest import NOW, OTHER_USER, USER


class FakeLookup:
    def __init__(self, expiries=None, error=None):
        self.expiries = expiries or {}
        self.error = error
        self.calls = []

    def fetch_expiries(self, registration):
        self.calls.append(registration)
        if self.error:
            raise self.error
        return self.expiries


@pytest.fixture
def make_engine(config, database):
    def _make(lookup):
        return AssetCalEngine(config, database=database, lookup=lookup)

    return _make


def test_refresh_stores_dates_and_moves_events(make_engine, asset_store, event_store, vehicle):
    lookup = FakeLookup({"mot": date(2026, 9, 13), "tax": None})
    engine = make_engine(lookup)
    engine.sync_vehicle(vehicle.id, USER)

    result = engine.refresh_vehicle(vehicle.id, USER)

    assert lookup.calls == ["AB12 CDE"]
    assert (result.created, result.updated) == (0, 1)
    maintenance = asset_store.get_asset(vehicle.id, USER).metadata["maintenance"]
    assert maintenance["mot"] == {"expires": "2026-09-13"}
    # Dates the sources did not return are kept
    assert maintenance["tax"] == {"expires": "2025-11-01"}
    mot = next(e for e in event_store.list_events_for_asset(vehicle.id) if e.origin == "derived:mot")
    assert mot.start.date() == date(2026, 9, 13)


def test_refresh_rejects_foreign_or_non_vehicle(make_engine, asset_store, vehicle):
    engine = make_engine(FakeLookup())
    house = asset_store.create_asset(user_id=USER, type="property")
    unregistered = asset_store.create_asset(user_id=USER, type="vehicle")

    with pytest.raises(AccessDeniedError):
        engine.refresh_vehicle(vehicle.id, OTHER_USER)
    with pytest.raises(ValidationError):
        engine.refresh_vehicle(house.id, USER)
    with pytest.raises(ValidationError):
        engine.refresh_vehicle(unregistered.id, USER)


def test_refresh_lookup_failure_leaves_asset_untouched(make_engine, asset_store, vehicle):
    engine = make_engine(FakeLookup(error=VehicleLookupError("DVLA down")))

    with pytest.raises(VehicleLookupError):
        engine.refresh_vehicle(vehicle.id, USER)
    assert asset_store.get_asset(vehicle.id, USER).metadata == vehicle.metadata


def test_run_sweep_uses_configured_grace(engine, make_event):
    make_event(start=NOW - timedelta(minutes=30), minutes=(0,))

    assert engine.run_sweep(now=NOW).created == 1


def test_engine_creates_schema_on_first_use(config):
    engine = AssetCalEngine(config)

    assert engine.notifications.list_for_user(USER) == []
    engine.database.dispose()
