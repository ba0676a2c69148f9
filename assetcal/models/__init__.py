"""Pydantic models for the asset calendar."""

from assetcal.models.asset import Asset
from assetcal.models.event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    ReminderMethod,
    ReminderOverride,
    ReminderSettings,
    derived_origin,
    origin_kind,
)
from assetcal.models.notification import NotificationCreate, NotificationRecord

__all__ = [
    "Asset",
    "CalendarEvent",
    "CalendarEventCreate",
    "CalendarEventUpdate",
    "ReminderMethod",
    "ReminderOverride",
    "ReminderSettings",
    "derived_origin",
    "origin_kind",
    "NotificationCreate",
    "NotificationRecord",
]
