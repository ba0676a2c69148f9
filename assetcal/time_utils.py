"""Date and time helpers shared by the sweep and the synchronizer."""

from datetime import date, datetime, time, timezone, tzinfo


def ensure_utc(dt: datetime) -> datetime:
    """Return an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def all_day_range(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Compute the all-day window for a date in the given time zone.

    Args:
        day: Calendar date
        tz: Time zone the day is anchored in

    Returns:
        (start, end) as aware UTC datetimes, start at 00:00:00 and end at
        23:59:59.999999 local time
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return ensure_utc(start), ensure_utc(end)


def parse_expiry_date(value: object, tz: tzinfo) -> date | None:
    """
    Parse a tracked expiry value into a calendar date.

    Accepts ``date``, ``datetime`` and ISO-8601 strings (``2025-03-01`` or a
    full timestamp). Timestamps are converted to ``tz`` before taking the
    date. Anything else, including empty strings, yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_date(value, tz)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # Plain date first, the common case for stored expiries
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _local_date(parsed, tz)


def _local_date(dt: datetime, tz: tzinfo) -> date:
    """Date of ``dt`` as seen in ``tz`` (naive input is treated as local)."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(tz).date()
