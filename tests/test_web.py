"""Tests for the Flask HTTP interface."""

from datetime import timedelta

import pytest
from icalendar import Calendar as ICalendar

from assetcal.config import AssetCalConfig
from assetcal.engine import AssetCalEngine
from assetcal.exceptions import StoreError
from assetcal.time_utils import utc_now
from assetcal.web import create_app
from tests.conftest import OTHER_USER, USER

CRON_URL = "/api/cron/check-event-reminders"


def as_user(user_id=USER):
    return {"X-User-Id": user_id}


def test_app_factory_exists():
    assert callable(create_app)


# Cron trigger


def test_cron_requires_secret(client, notification_store):
    response = client.get(CRON_URL)

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


def test_cron_rejects_wrong_secret(client):
    response = client.get(CRON_URL, headers={"Authorization": "Bearer wrong"})
    assert response.status_code == 401


def test_cron_with_bearer_secret_creates_notifications(client, make_event, notification_store):
    make_event(start=utc_now() + timedelta(minutes=25), minutes=(30,), name="Dentist")

    response = client.get(CRON_URL, headers={"Authorization": "Bearer s3cret"})

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "created": 1}
    assert notification_store.list_for_user(USER)[0].title == 'Reminder: "Dentist" in 30 minutes'

    again = client.get(CRON_URL, headers={"Authorization": "Bearer s3cret"})
    assert again.get_json() == {"ok": True, "created": 0}


def test_cron_accepts_query_secret(client):
    response = client.get(f"{CRON_URL}?secret=s3cret")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "created": 0}


def test_cron_unconfigured_secret_rejects_in_production(tmp_path, database):
    config = AssetCalConfig(database_url=f"sqlite:///{tmp_path / 'x.db'}", environment="production")
    app = create_app(engine=AssetCalEngine(config, database=database))

    response = app.test_client().get(f"{CRON_URL}?secret=anything")

    assert response.status_code == 401


def test_cron_bypasses_auth_in_development(tmp_path, database):
    config = AssetCalConfig(database_url=f"sqlite:///{tmp_path / 'x.db'}", environment="development")
    app = create_app(engine=AssetCalEngine(config, database=database))

    response = app.test_client().get(CRON_URL)

    assert response.status_code == 200
    assert response.get_json()["ok"] is True


def test_cron_store_failure_returns_500(client, engine, monkeypatch):
    def unavailable(*args, **kwargs):
        raise StoreError("database unavailable")

    monkeypatch.setattr(engine.event_store, "list_events_with_reminders", unavailable)

    response = client.get(CRON_URL, headers={"Authorization": "Bearer s3cret"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to check reminders"}


# Vehicle sync


def test_sync_requires_user(client, vehicle):
    response = client.post(f"/api/vehicles/{vehicle.id}/sync-reminder-events")
    assert response.status_code == 401


def test_sync_creates_events_and_enables_tab(client, vehicle):
    response = client.post(
        f"/api/vehicles/{vehicle.id}/sync-reminder-events", headers=as_user()
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "synced": True,
        "created": 2,
        "updated": 0,
        "tabs": ["overview", "calendar"],
    }

    again = client.post(f"/api/vehicles/{vehicle.id}/sync-reminder-events", headers=as_user())
    assert again.get_json() == {"synced": True, "created": 0, "updated": 0}


def test_sync_without_dates(client, asset_store):
    bare = asset_store.create_asset(user_id=USER, type="vehicle", metadata={})

    response = client.post(f"/api/vehicles/{bare.id}/sync-reminder-events", headers=as_user())

    assert response.get_json() == {"synced": True, "created": 0, "updated": 0}


def test_sync_foreign_asset_is_404(client, vehicle):
    response = client.post(
        f"/api/vehicles/{vehicle.id}/sync-reminder-events", headers=as_user(OTHER_USER)
    )
    assert response.status_code == 404


def test_sync_non_vehicle_is_400(client, asset_store):
    house = asset_store.create_asset(user_id=USER, type="property")

    response = client.post(f"/api/vehicles/{house.id}/sync-reminder-events", headers=as_user())

    assert response.status_code == 400
    assert response.get_json() == {"error": "Asset is not a vehicle"}


@pytest.mark.parametrize("asset_id", ["abc", "0", "-3"])
def test_sync_invalid_id_is_400(client, asset_id):
    response = client.post(f"/api/vehicles/{asset_id}/sync-reminder-events", headers=as_user())
    assert response.status_code == 400


# Calendar events


def event_json(asset_id, **overrides):
    data = {
        "assetId": asset_id,
        "name": "Service",
        "start": "2025-06-01T09:00:00Z",
        "end": "2025-06-01T10:00:00Z",
        "reminders": {"useDefault": False, "overrides": [{"method": "popup", "minutes": 60}]},
    }
    data.update(overrides)
    return data


def test_event_crud(client, vehicle):
    created = client.post("/api/calendar-events", json=event_json(vehicle.id), headers=as_user())
    assert created.status_code == 201
    event = created.get_json()["event"]
    assert event["assetId"] == vehicle.id
    assert event["origin"] == "user"

    fetched = client.get(f"/api/calendar-events/{event['id']}", headers=as_user())
    assert fetched.get_json()["event"]["name"] == "Service"

    patched = client.patch(
        f"/api/calendar-events/{event['id']}", json={"name": "Oil change"}, headers=as_user()
    )
    assert patched.get_json()["event"]["name"] == "Oil change"

    listed = client.get(f"/api/calendar-events?assetId={vehicle.id}", headers=as_user())
    assert [e["id"] for e in listed.get_json()["events"]] == [event["id"]]

    deleted = client.delete(f"/api/calendar-events/{event['id']}", headers=as_user())
    assert deleted.get_json() == {"success": True}
    assert client.get(f"/api/calendar-events/{event['id']}", headers=as_user()).status_code == 404


def test_event_validation_is_422(client, vehicle):
    response = client.post(
        "/api/calendar-events", json=event_json(vehicle.id, name=""), headers=as_user()
    )
    assert response.status_code == 422


def test_clearing_event_name_is_422(client, vehicle):
    created = client.post("/api/calendar-events", json=event_json(vehicle.id), headers=as_user())
    event_id = created.get_json()["event"]["id"]

    response = client.patch(
        f"/api/calendar-events/{event_id}", json={"name": None}, headers=as_user()
    )

    assert response.status_code == 422
    fetched = client.get(f"/api/calendar-events/{event_id}", headers=as_user())
    assert fetched.get_json()["event"]["name"] == "Service"


def test_event_on_foreign_asset_is_403(client, vehicle):
    response = client.post(
        "/api/calendar-events", json=event_json(vehicle.id), headers=as_user(OTHER_USER)
    )
    assert response.status_code == 403


def test_rescheduling_derived_event_is_409(client, vehicle):
    client.post(f"/api/vehicles/{vehicle.id}/sync-reminder-events", headers=as_user())
    events = client.get("/api/calendar-events", headers=as_user()).get_json()["events"]
    derived = next(e for e in events if e["origin"] == "derived:mot")

    response = client.patch(
        f"/api/calendar-events/{derived['id']}",
        json={"start": "2030-01-01T00:00:00Z", "end": "2030-01-01T01:00:00Z"},
        headers=as_user(),
    )

    assert response.status_code == 409


def test_invalid_asset_filter_is_400(client):
    response = client.get("/api/calendar-events?assetId=x", headers=as_user())
    assert response.status_code == 400


def test_ics_feed(client, vehicle):
    client.post(f"/api/vehicles/{vehicle.id}/sync-reminder-events", headers=as_user())

    response = client.get("/api/calendar-events.ics", headers=as_user())

    assert response.status_code == 200
    assert response.content_type.startswith("text/calendar")
    cal = ICalendar.from_ical(response.data)
    summaries = sorted(str(e.get("summary")) for e in cal.walk("VEVENT"))
    assert summaries == ["MOT Reminder", "Tax Reminder"]


# Notifications


def test_notifications_list_and_mark_read(client, make_event, notification_store):
    make_event(start=utc_now() + timedelta(minutes=5), minutes=(10,))
    client.get(CRON_URL, headers={"Authorization": "Bearer s3cret"})

    listed = client.get("/api/notifications", headers=as_user()).get_json()["notifications"]
    assert len(listed) == 1
    assert listed[0]["read"] is False

    marked = client.patch(f"/api/notifications/{listed[0]['id']}", headers=as_user())
    assert marked.get_json()["notification"]["read"] is True

    foreign = client.patch(f"/api/notifications/{listed[0]['id']}", headers=as_user(OTHER_USER))
    assert foreign.status_code == 404


def test_notifications_require_user(client):
    assert client.get("/api/notifications").status_code == 401
