"""Tests for output layer."""

import json
from datetime import datetime, timedelta, timezone

from icalendar import Calendar as ICalendar

from assetcal.models.event import CalendarEvent, ReminderSettings
from assetcal.output import WRITERS, ICSWriter, JSONWriter
from assetcal.output.ics_writer import event_uid

UTC = timezone.utc


def make_event(event_id=1, minutes=(43200, 1440), **overrides) -> CalendarEvent:
    data = {
        "id": event_id,
        "user_id": "user_1",
        "asset_id": 4,
        "name": "MOT Reminder",
        "start": datetime(2025, 9, 14, tzinfo=UTC),
        "end": datetime(2025, 9, 14, 23, 59, 59, tzinfo=UTC),
        "origin": "derived:mot",
        "color": "orange",
        "reminders": ReminderSettings.model_validate(
            {"overrides": [{"minutes": m} for m in minutes]}
        ),
    }
    data.update(overrides)
    return CalendarEvent(**data)


def test_ics_writer(tmp_path):
    """Test ICSWriter creates valid ICS file."""
    path = tmp_path / "feed.ics"

    ICSWriter().write([make_event()], path, name="Garage")

    cal = ICalendar.from_ical(path.read_bytes())
    assert str(cal["X-WR-CALNAME"]) == "Garage"
    vevents = cal.walk("VEVENT")
    assert len(vevents) == 1
    vevent = vevents[0]
    assert str(vevent["summary"]) == "MOT Reminder"
    assert str(vevent["uid"]) == "assetcal-event-1"
    assert vevent["dtstart"].dt == datetime(2025, 9, 14, tzinfo=UTC)
    assert str(vevent["X-ASSETCAL-ORIGIN"]) == "derived:mot"


def test_ics_writer_one_alarm_per_offset():
    cal = ICSWriter().to_calendar([make_event()])

    alarms = cal.walk("VALARM")
    assert [a["TRIGGER"].dt for a in alarms] == [timedelta(days=-30), timedelta(days=-1)]
    assert all(str(a["ACTION"]) == "DISPLAY" for a in alarms)


def test_ics_writer_without_reminders():
    cal = ICSWriter().to_calendar([make_event(reminders=None, description="Book garage")])

    assert cal.walk("VALARM") == []
    assert str(cal.walk("VEVENT")[0]["description"]) == "Book garage"


def test_event_uid_is_stable():
    assert event_uid(make_event(event_id=9)) == event_uid(make_event(event_id=9, name="Renamed"))


def test_json_writer(tmp_path):
    path = tmp_path / "events.json"

    JSONWriter().write([make_event(), make_event(event_id=2, name="Tax Reminder")], path)

    payload = json.loads(path.read_text())
    assert payload["name"] == "AssetCal"
    assert [e["id"] for e in payload["events"]] == [1, 2]
    assert payload["events"][0]["reminders"]["overrides"][0]["minutes"] == 43200


def test_writer_registry():
    assert {name: cls().get_extension() for name, cls in WRITERS.items()} == {
        "ics": "ics",
        "json": "json",
    }
