"""Pure evaluation of which reminder offsets are currently due."""

from datetime import datetime, timedelta

from assetcal.models.event import CalendarEvent
from assetcal.time_utils import ensure_utc


def trigger_time(start: datetime, minutes: int) -> datetime:
    """Instant a reminder ``minutes`` before ``start`` fires."""
    return ensure_utc(start) - timedelta(minutes=minutes)


def due_offsets(event: CalendarEvent, now: datetime, grace_window: timedelta) -> set[int]:
    """
    Compute the reminder offsets of an event that are due at ``now``.

    An offset is due when its trigger time lies in ``[now - grace_window, now]``.
    Events that started before ``now - grace_window`` are stale and yield
    nothing, so a sweep resuming after downtime does not flood reminders for
    events long past.

    Args:
        event: Event to evaluate
        now: Evaluation instant (naive values are treated as UTC)
        grace_window: How far back a missed trigger may still fire

    Returns:
        Set of due offsets in minutes (empty when the event has no reminders)
    """
    if event.reminders is None or not event.reminders.overrides:
        return set()

    now = ensure_utc(now)
    cutoff = now - grace_window
    if event.start < cutoff:
        return set()

    due = set()
    for override in event.reminders.overrides:
        fires_at = trigger_time(event.start, override.minutes)
        if cutoff <= fires_at <= now:
            due.add(override.minutes)
    return due
