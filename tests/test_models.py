"""Tests for Pydantic models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from assetcal.models import (
    Asset,
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    NotificationCreate,
    ReminderMethod,
    ReminderSettings,
    derived_origin,
    origin_kind,
)

UTC = timezone.utc


def make_event(**overrides) -> CalendarEvent:
    data = {
        "id": 1,
        "user_id": "user_1",
        "asset_id": 7,
        "name": "Service",
        "start": datetime(2025, 6, 1, 9, tzinfo=UTC),
        "end": datetime(2025, 6, 1, 10, tzinfo=UTC),
    }
    data.update(overrides)
    return CalendarEvent(**data)


def test_reminder_settings_camel_case_round_trip():
    """Test reminders accept and emit the stored camelCase shape."""
    settings = ReminderSettings.model_validate(
        {"useDefault": False, "overrides": [{"method": "email", "minutes": 1440}]}
    )

    assert settings.overrides[0].method == ReminderMethod.EMAIL
    assert settings.to_json() == {
        "useDefault": False,
        "overrides": [{"method": "email", "minutes": 1440}],
    }


def test_reminder_minutes_must_be_non_negative():
    with pytest.raises(ValidationError):
        ReminderSettings.model_validate({"overrides": [{"minutes": -5}]})


def test_naive_timestamps_are_treated_as_utc():
    event = make_event(start=datetime(2025, 6, 1, 9), end=datetime(2025, 6, 1, 10))

    assert event.start.tzinfo is not None
    assert event.start == datetime(2025, 6, 1, 9, tzinfo=UTC)


def test_offset_timestamps_are_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    event = make_event(
        start=datetime(2025, 6, 1, 11, tzinfo=plus_two),
        end=datetime(2025, 6, 1, 12, tzinfo=plus_two),
    )

    assert event.start == datetime(2025, 6, 1, 9, tzinfo=UTC)
    assert event.start.utcoffset() == timedelta(0)


def test_end_before_start_rejected():
    with pytest.raises(ValidationError):
        make_event(end=datetime(2025, 6, 1, 8, tzinfo=UTC))


def test_zero_length_event_allowed():
    start = datetime(2025, 6, 1, 9, tzinfo=UTC)
    assert make_event(start=start, end=start).end == start


def test_origin_helpers():
    assert derived_origin("mot") == "derived:mot"
    assert origin_kind("derived:tax") == "tax"
    assert origin_kind("user") is None
    assert origin_kind("derived:") is None
    assert origin_kind(None) is None


def test_derived_kind_and_is_derived():
    assert make_event().is_derived is False
    derived = make_event(origin="derived:mot")
    assert derived.is_derived is True
    assert derived.derived_kind == "mot"


def test_to_api_uses_camel_case():
    event = make_event(
        reminders=ReminderSettings.model_validate({"overrides": [{"minutes": 30}]})
    )

    data = event.to_api()

    assert data["assetId"] == 7
    assert data["userId"] == "user_1"
    assert data["start"] == "2025-06-01T09:00:00+00:00"
    assert data["reminders"] == {
        "useDefault": False,
        "overrides": [{"method": "popup", "minutes": 30}],
    }
    assert data["origin"] == "user"


def test_create_accepts_alias_and_field_name():
    by_alias = CalendarEventCreate.model_validate(
        {"assetId": 3, "name": "x", "start": "2025-06-01T09:00:00Z", "end": "2025-06-01T09:00:00Z"}
    )
    by_name = CalendarEventCreate(
        asset_id=3, name="x", start=by_alias.start, end=by_alias.end
    )

    assert by_alias == by_name


def test_update_tracks_explicitly_set_fields():
    patch = CalendarEventUpdate.model_validate({"name": "New", "reminders": None})

    assert patch.changes() == {"name": "New", "reminders": None}
    assert patch.touches_schedule is False
    assert CalendarEventUpdate(start=datetime(2025, 1, 1, tzinfo=UTC)).touches_schedule is True


def test_notification_reminder_key():
    reminder = NotificationCreate(
        user_id="u",
        type="event_reminder",
        title="t",
        metadata={"eventId": 5, "reminderMinutes": 30},
    )
    other = NotificationCreate(user_id="u", type="system", title="t", metadata={"eventId": 5})

    assert reminder.reminder_key == (5, 30)
    assert other.reminder_key == (None, None)


def test_asset_maintenance_entry():
    asset = Asset(
        id=1,
        user_id="u",
        type="vehicle",
        metadata={"maintenance": {"mot": {"expires": "2025-09-14"}, "tax": "bogus"}},
    )

    assert asset.is_vehicle
    assert asset.maintenance_entry("mot") == {"expires": "2025-09-14"}
    assert asset.maintenance_entry("tax") == {}
    assert asset.maintenance_entry("insurance") == {}
    assert asset.tabs == ["overview"]


def test_asset_tolerates_malformed_maintenance():
    asset = Asset(id=1, user_id="u", type="vehicle", metadata={"maintenance": "n/a"})
    assert asset.maintenance_entry("mot") == {}
