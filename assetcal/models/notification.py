"""Notification record models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from assetcal.constants import EVENT_REMINDER_TYPE


class NotificationCreate(BaseModel):
    """Data for a new notification record."""

    user_id: str
    type: str
    title: str
    metadata: Optional[dict[str, Any]] = None

    @property
    def reminder_key(self) -> tuple[Optional[int], Optional[int]]:
        """(eventId, reminderMinutes) for reminder notifications, else (None, None).

        These values back the store's uniqueness constraint.
        """
        if self.type != EVENT_REMINDER_TYPE or not self.metadata:
            return None, None
        return self.metadata.get("eventId"), self.metadata.get("reminderMinutes")


class NotificationRecord(BaseModel):
    """Persisted notification."""

    id: int
    user_id: str
    type: str
    title: str
    metadata: Optional[dict[str, Any]] = None
    read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    def to_api(self) -> dict:
        """Convert to the camelCase JSON shape used by the HTTP API."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type,
            "title": self.title,
            "metadata": self.metadata,
            "read": self.read,
            "createdAt": self.created_at.isoformat(),
        }
