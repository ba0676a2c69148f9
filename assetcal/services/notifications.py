"""User-facing notification listing."""

from assetcal.constants import NOTIFICATION_LIST_LIMIT
from assetcal.exceptions import NotFoundError, ValidationError
from assetcal.models.notification import NotificationRecord
from assetcal.storage.notification_store import SqlNotificationStore


class NotificationService:
    """Read side of the notification store, scoped to the acting user."""

    def __init__(self, notification_store: SqlNotificationStore):
        self.notification_store = notification_store

    def list_for_user(
        self, user_id: str, limit: int = NOTIFICATION_LIST_LIMIT
    ) -> list[NotificationRecord]:
        """Newest notifications first, at most ``limit``."""
        if limit < 1:
            raise ValidationError("limit must be positive")
        return self.notification_store.list_for_user(user_id, limit=limit)

    def mark_read(self, notification_id: int, user_id: str) -> NotificationRecord:
        """Mark an owned notification read; raises NotFoundError otherwise."""
        record = self.notification_store.mark_read(notification_id, user_id)
        if record is None:
            raise NotFoundError(f"Notification {notification_id} not found")
        return record
