"""Shared constants for the reminder engine."""

# Notification type tag for reminders produced by the sweep
EVENT_REMINDER_TYPE = "event_reminder"

# Sweep defaults
DEFAULT_GRACE_MINUTES = 60
DEFAULT_SWEEP_MAX_DURATION_SECONDS = 60

# Event origins
USER_ORIGIN = "user"
DERIVED_ORIGIN_PREFIX = "derived:"

# Derived events
DERIVED_EVENT_COLOR = "orange"
MINUTES_PER_DAY = 24 * 60

# Feature tab enabled on an asset once it owns derived events
CALENDAR_TAB = "calendar"
DEFAULT_TABS = ["overview"]

NOTIFICATION_LIST_LIMIT = 50
