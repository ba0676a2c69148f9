"""SQL-backed calendar event store with ownership scoping."""

import logging
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select

from assetcal.models.event import CalendarEvent, CalendarEventCreate, CalendarEventUpdate
from assetcal.storage.database import Database
from assetcal.storage.tables import CalendarEventRow
from assetcal.time_utils import utc_now

logger = logging.getLogger(__name__)


def _to_event(row: CalendarEventRow) -> CalendarEvent:
    """Convert an ORM row into a validated model."""
    return CalendarEvent(
        id=row.id,
        user_id=row.user_id,
        asset_id=row.asset_id,
        name=row.name,
        description=row.description,
        location=row.location,
        color=row.color,
        start=row.start,
        end=row.end,
        reminders=row.reminders,
        origin=row.origin,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlEventStore:
    """Event store over the shared ``Database``."""

    def __init__(self, database: Database):
        """Initialize with database (dependency injection)."""
        self.database = database

    def list_events_with_reminders(self, start_after: datetime) -> list[CalendarEvent]:
        """
        Candidate events for the reminder sweep.

        Rows whose stored data no longer validates (for example a malformed
        reminder configuration) are logged and skipped so one bad row cannot
        hide the others.

        Args:
            start_after: Only events starting at or after this instant

        Returns:
            Events ordered by start
        """
        stmt = (
            select(CalendarEventRow)
            .where(CalendarEventRow.reminders.is_not(None))
            .where(CalendarEventRow.start >= start_after)
            .order_by(CalendarEventRow.start, CalendarEventRow.id)
        )
        events = []
        with self.database.session_scope() as session:
            for row in session.scalars(stmt):
                try:
                    events.append(_to_event(row))
                except PydanticValidationError as e:
                    logger.warning(f"Skipping event {row.id} with malformed data: {e}")
        return events

    def list_events_for_asset(self, asset_id: int) -> list[CalendarEvent]:
        """All events attached to an asset, ordered by start."""
        stmt = (
            select(CalendarEventRow)
            .where(CalendarEventRow.asset_id == asset_id)
            .order_by(CalendarEventRow.start, CalendarEventRow.id)
        )
        with self.database.session_scope() as session:
            return [_to_event(row) for row in session.scalars(stmt)]

    def list_events_for_user(self, user_id: str) -> list[CalendarEvent]:
        """All events owned by a user, ordered by start."""
        stmt = (
            select(CalendarEventRow)
            .where(CalendarEventRow.user_id == user_id)
            .order_by(CalendarEventRow.start, CalendarEventRow.id)
        )
        with self.database.session_scope() as session:
            return [_to_event(row) for row in session.scalars(stmt)]

    def get_event(self, event_id: int, user_id: str) -> CalendarEvent | None:
        """Event by id if owned by ``user_id``."""
        with self.database.session_scope() as session:
            row = self._get_owned_row(session, event_id, user_id)
            return _to_event(row) if row else None

    def create_event(self, data: CalendarEventCreate, user_id: str) -> CalendarEvent:
        """Insert an event owned by ``user_id``."""
        now = utc_now()
        row = CalendarEventRow(
            asset_id=data.asset_id,
            user_id=user_id,
            name=data.name,
            description=data.description,
            location=data.location,
            color=data.color,
            start=data.start,
            end=data.end,
            reminders=data.reminders.to_json() if data.reminders else None,
            origin=data.origin,
            created_at=now,
            updated_at=now,
        )
        with self.database.session_scope() as session:
            session.add(row)
            session.flush()
            return _to_event(row)

    def update_event(
        self, event_id: int, patch: CalendarEventUpdate, user_id: str
    ) -> CalendarEvent | None:
        """
        Apply a partial update.

        The resulting start/end pair is validated before anything is written.

        Returns:
            Updated event, or None if the event is missing or not owned
        """
        changes = patch.changes()
        with self.database.session_scope() as session:
            row = self._get_owned_row(session, event_id, user_id)
            if row is None:
                return None

            for field, value in changes.items():
                if field == "reminders":
                    value = value.to_json() if value else None
                setattr(row, field, value)
            row.updated_at = utc_now()

            # Raises before commit if the new range is inverted
            return _to_event(row)

    def delete_event(self, event_id: int, user_id: str) -> bool:
        """Delete an owned event; True if a row was removed."""
        with self.database.session_scope() as session:
            row = self._get_owned_row(session, event_id, user_id)
            if row is None:
                return False
            session.delete(row)
            return True

    @staticmethod
    def _get_owned_row(session, event_id: int, user_id: str) -> CalendarEventRow | None:
        stmt = select(CalendarEventRow).where(
            CalendarEventRow.id == event_id,
            CalendarEventRow.user_id == user_id,
        )
        return session.scalars(stmt).first()
