"""Reminder evaluation and the periodic reminder sweep."""

from assetcal.reminders.evaluator import due_offsets, trigger_time
from assetcal.reminders.sweep import ReminderSweep, SweepResult, build_reminder_notification

__all__ = [
    "due_offsets",
    "trigger_time",
    "ReminderSweep",
    "SweepResult",
    "build_reminder_notification",
]
