"""SQL-backed notification store."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from assetcal.constants import EVENT_REMINDER_TYPE, NOTIFICATION_LIST_LIMIT
from assetcal.exceptions import DuplicateNotificationError
from assetcal.models.notification import NotificationCreate, NotificationRecord
from assetcal.storage.database import Database
from assetcal.storage.tables import NotificationRow
from assetcal.time_utils import utc_now

logger = logging.getLogger(__name__)


def _to_record(row: NotificationRow) -> NotificationRecord:
    """Convert an ORM row into a model."""
    return NotificationRecord(
        id=row.id,
        user_id=row.user_id,
        type=row.type,
        title=row.title,
        metadata=row.metadata_,
        read=row.read,
        created_at=row.created_at,
    )


class SqlNotificationStore:
    """Notification store enforcing one reminder per (user, event, offset)."""

    def __init__(self, database: Database):
        """Initialize with database (dependency injection)."""
        self.database = database

    def exists_reminder(self, user_id: str, event_id: int, minutes: int) -> bool:
        """True if a reminder notification already exists for this key."""
        stmt = (
            select(NotificationRow.id)
            .where(
                NotificationRow.user_id == user_id,
                NotificationRow.type == EVENT_REMINDER_TYPE,
                NotificationRow.event_id == event_id,
                NotificationRow.reminder_minutes == minutes,
            )
            .limit(1)
        )
        with self.database.session_scope() as session:
            return session.scalars(stmt).first() is not None

    def create_notification(self, data: NotificationCreate) -> NotificationRecord:
        """
        Insert a notification (conditional on the uniqueness constraint).

        Args:
            data: Notification to create

        Returns:
            The stored record

        Raises:
            DuplicateNotificationError: If a reminder for the same
                (user, event, offset) already exists
        """
        event_id, reminder_minutes = data.reminder_key
        row = NotificationRow(
            user_id=data.user_id,
            type=data.type,
            title=data.title,
            metadata_=data.metadata,
            event_id=event_id,
            reminder_minutes=reminder_minutes,
            read=False,
            created_at=utc_now(),
        )
        try:
            with self.database.session_scope() as session:
                session.add(row)
                session.flush()
                return _to_record(row)
        except IntegrityError as e:
            raise DuplicateNotificationError(
                f"Reminder already exists for user={data.user_id} "
                f"event={event_id} minutes={reminder_minutes}"
            ) from e

    def list_for_user(
        self, user_id: str, limit: int = NOTIFICATION_LIST_LIMIT
    ) -> list[NotificationRecord]:
        """Most recent notifications for a user, newest first."""
        stmt = (
            select(NotificationRow)
            .where(NotificationRow.user_id == user_id)
            .order_by(NotificationRow.created_at.desc(), NotificationRow.id.desc())
            .limit(limit)
        )
        with self.database.session_scope() as session:
            return [_to_record(row) for row in session.scalars(stmt)]

    def mark_read(self, notification_id: int, user_id: str) -> NotificationRecord | None:
        """Mark an owned notification as read; None if missing or not owned."""
        with self.database.session_scope() as session:
            result = session.execute(
                update(NotificationRow)
                .where(
                    NotificationRow.id == notification_id,
                    NotificationRow.user_id == user_id,
                )
                .values(read=True)
            )
            if result.rowcount == 0:
                return None
            row = session.get(NotificationRow, notification_id)
            return _to_record(row)
