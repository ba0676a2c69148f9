"""Tests for reminder offset evaluation."""

from datetime import datetime, timedelta, timezone

from assetcal.models.event import CalendarEvent, ReminderOverride, ReminderSettings
from assetcal.reminders import due_offsets, trigger_time

GRACE = timedelta(hours=1)
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_event(start, minutes=(30,), reminders=True):
    settings = None
    if reminders:
        settings = ReminderSettings(overrides=[ReminderOverride(minutes=m) for m in minutes])
    return CalendarEvent(
        id=1,
        user_id="u",
        name="Event",
        start=start,
        end=start + timedelta(hours=1),
        reminders=settings,
    )


def test_trigger_time():
    assert trigger_time(NOW, 90) == NOW - timedelta(minutes=90)


def test_offset_due_when_trigger_just_passed():
    """Trigger 5 minutes ago is due."""
    event = make_event(NOW + timedelta(minutes=25), minutes=(30,))
    assert due_offsets(event, NOW, GRACE) == {30}


def test_offset_not_due_before_trigger():
    event = make_event(NOW + timedelta(minutes=31), minutes=(30,))
    assert due_offsets(event, NOW, GRACE) == set()


def test_trigger_exactly_now_is_due():
    event = make_event(NOW + timedelta(minutes=30), minutes=(30,))
    assert due_offsets(event, NOW, GRACE) == {30}


def test_trigger_exactly_at_grace_boundary_is_due():
    event = make_event(NOW - GRACE + timedelta(minutes=10), minutes=(10,))
    assert due_offsets(event, NOW, GRACE) == {10}


def test_trigger_older_than_grace_window_not_due():
    """A 30-day reminder for an event tomorrow fired long ago."""
    event = make_event(NOW + timedelta(days=1, hours=1), minutes=(30 * 1440, 1440))
    assert due_offsets(event, NOW, GRACE) == set()


def test_multiple_offsets_only_due_ones_returned():
    event = make_event(NOW + timedelta(minutes=10), minutes=(60, 15, 5))
    assert due_offsets(event, NOW, GRACE) == {60, 15}


def test_stale_event_yields_nothing():
    """Events that started before the grace window are skipped."""
    event = make_event(NOW - timedelta(hours=2), minutes=(0,))
    assert due_offsets(event, NOW, GRACE) == set()


def test_zero_minute_offset_due_at_start():
    event = make_event(NOW - timedelta(minutes=5), minutes=(0,))
    assert due_offsets(event, NOW, GRACE) == {0}


def test_no_reminders():
    event = make_event(NOW, reminders=False)
    assert due_offsets(event, NOW, GRACE) == set()


def test_empty_overrides():
    event = make_event(NOW, minutes=())
    assert due_offsets(event, NOW, GRACE) == set()


def test_naive_now_treated_as_utc():
    event = make_event(NOW + timedelta(minutes=25), minutes=(30,))
    naive_now = NOW.replace(tzinfo=None)
    assert due_offsets(event, naive_now, GRACE) == {30}


def test_deterministic():
    event = make_event(NOW + timedelta(minutes=10), minutes=(60, 15))
    assert due_offsets(event, NOW, GRACE) == due_offsets(event, NOW, GRACE)


def test_trigger_just_before_grace_boundary_not_due():
    """One microsecond past the window while the event itself is still upcoming."""
    event = make_event(NOW + timedelta(minutes=10), minutes=(70,))
    assert due_offsets(event, NOW + timedelta(microseconds=1), GRACE) == set()
