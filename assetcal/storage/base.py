"""Store contracts consumed by the sweep and the synchronizer."""

from datetime import datetime
from typing import Any, Protocol

from assetcal.models.asset import Asset
from assetcal.models.event import CalendarEvent, CalendarEventCreate, CalendarEventUpdate
from assetcal.models.notification import NotificationCreate, NotificationRecord


class EventStore(Protocol):
    """Protocol for calendar event persistence."""

    def list_events_with_reminders(self, start_after: datetime) -> list[CalendarEvent]:
        """Events with a reminder configuration starting at or after ``start_after``."""
        ...

    def list_events_for_asset(self, asset_id: int) -> list[CalendarEvent]:
        """All events attached to an asset, ordered by start."""
        ...

    def create_event(self, data: CalendarEventCreate, user_id: str) -> CalendarEvent:
        """Insert an event owned by ``user_id``."""
        ...

    def update_event(
        self, event_id: int, patch: CalendarEventUpdate, user_id: str
    ) -> CalendarEvent | None:
        """Apply a partial update; None if the event is missing or not owned."""
        ...


class NotificationStore(Protocol):
    """Protocol for notification persistence."""

    def exists_reminder(self, user_id: str, event_id: int, minutes: int) -> bool:
        """True if a reminder notification already exists for this key."""
        ...

    def create_notification(self, data: NotificationCreate) -> NotificationRecord:
        """
        Insert a notification.

        Raises:
            DuplicateNotificationError: If the uniqueness constraint rejects it
        """
        ...


class AssetStore(Protocol):
    """Protocol for the subset of asset persistence the engine needs."""

    def get_asset(self, asset_id: int, user_id: str) -> Asset | None:
        """Asset owned by ``user_id``, or None."""
        ...

    def update_asset(self, asset_id: int, changes: dict[str, Any], user_id: str) -> Asset | None:
        """Update ``tabs``/``metadata``/``name``; None if missing or not owned."""
        ...
