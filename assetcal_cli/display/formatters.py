"""Pure formatting functions for display output."""

from datetime import datetime, timezone, tzinfo


def format_relative_time(dt: datetime, now: datetime | None = None) -> str:
    """Format datetime relative to now.

    Args:
        dt: Datetime to format (naive values are treated as UTC).
        now: Reference instant, defaults to the current time.

    Returns:
        Formatted time string (e.g., "2h ago", "in 3d", "just now").
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = int((now - dt).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        label = f"{seconds // 60}m"
    elif seconds < 86400:
        label = f"{seconds // 3600}h"
    elif seconds < 86400 * 30:
        label = f"{seconds // 86400}d"
    elif seconds < 86400 * 365:
        label = f"{seconds // (86400 * 30)}mo"
    else:
        label = f"{seconds // (86400 * 365)}y"
    return f"in {label}" if future else f"{label} ago"


def format_offset(minutes: int) -> str:
    """Format a reminder offset (e.g., "30d", "2h", "15m")."""
    if minutes and minutes % 1440 == 0:
        return f"{minutes // 1440}d"
    if minutes and minutes % 60 == 0:
        return f"{minutes // 60}h"
    return f"{minutes}m"


def format_local(dt: datetime, tz: tzinfo) -> str:
    """Format an aware datetime in the given zone as 'YYYY-MM-DD HH:MM'."""
    return dt.astimezone(tz).strftime("%Y-%m-%d %H:%M")
