"""User-facing calendar event operations with ownership checks."""

import logging
from typing import Any, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from assetcal.constants import USER_ORIGIN
from assetcal.exceptions import (
    AccessDeniedError,
    DerivedEventLockedError,
    NotFoundError,
    ValidationError,
)
from assetcal.models.event import CalendarEvent, CalendarEventCreate, CalendarEventUpdate
from assetcal.storage.asset_store import SqlAssetStore
from assetcal.storage.event_store import SqlEventStore

logger = logging.getLogger(__name__)


def parse_input(model_cls: type[BaseModel], data: Union[BaseModel, dict[str, Any]]):
    """
    Validate raw input into ``model_cls``.

    Raises:
        ValidationError: With the first validation message
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid input")
        raise ValidationError(f"{location}: {message}" if location else message) from e


class CalendarEventService:
    """CRUD over calendar events scoped to the acting user."""

    def __init__(self, event_store: SqlEventStore, asset_store: SqlAssetStore):
        """Initialize with stores (dependency injection)."""
        self.event_store = event_store
        self.asset_store = asset_store

    def create(
        self, data: Union[CalendarEventCreate, dict[str, Any]], user_id: str
    ) -> CalendarEvent:
        """
        Create a user event on an owned asset.

        Args:
            data: Event fields (model or camelCase dict)
            user_id: Acting user

        Returns:
            Created event

        Raises:
            ValidationError: If the input is invalid
            AccessDeniedError: If the asset is not owned by the user
        """
        event_data = parse_input(CalendarEventCreate, data)
        if event_data.origin != USER_ORIGIN:
            raise ValidationError("origin cannot be set on user events")
        self._verify_asset(event_data.asset_id, user_id)

        event = self.event_store.create_event(event_data, user_id)
        logger.info(f"Created event {event.id} on asset {event.asset_id}")
        return event

    def get(self, event_id: int, user_id: str) -> CalendarEvent:
        """Owned event by id; raises NotFoundError otherwise."""
        event = self.event_store.get_event(event_id, user_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event

    def list_for_asset(self, asset_id: int, user_id: str) -> list[CalendarEvent]:
        """Events of an owned asset, ordered by start."""
        self._verify_asset(asset_id, user_id)
        return self.event_store.list_events_for_asset(asset_id)

    def list_for_user(self, user_id: str) -> list[CalendarEvent]:
        return self.event_store.list_events_for_user(user_id)

    def update(
        self,
        event_id: int,
        patch: Union[CalendarEventUpdate, dict[str, Any]],
        user_id: str,
    ) -> CalendarEvent:
        """
        Apply a partial update to an owned event.

        Derived events keep their schedule: changing their start or end is
        refused. The origin of any event is read-only.

        Raises:
            ValidationError: If the input is invalid or the range inverted
            NotFoundError: If the event is missing or not owned
            AccessDeniedError: If moved to an asset the user does not own
            DerivedEventLockedError: If rescheduling a derived event
        """
        update = parse_input(CalendarEventUpdate, patch)
        existing = self.get(event_id, user_id)
        fields = update.model_fields_set

        if "origin" in fields and update.origin != existing.origin:
            raise ValidationError("origin is read-only")
        if "name" in fields and update.name is None:
            raise ValidationError("name cannot be cleared")

        if existing.is_derived and update.touches_schedule:
            moved = ("start" in fields and update.start != existing.start) or (
                "end" in fields and update.end != existing.end
            )
            if moved:
                raise DerivedEventLockedError(
                    f"Event {event_id} follows a tracked expiry date and cannot be rescheduled"
                )

        new_start = update.start if "start" in fields else existing.start
        new_end = update.end if "end" in fields else existing.end
        if new_start is None or new_end is None:
            raise ValidationError("start and end cannot be cleared")
        if new_end < new_start:
            raise ValidationError("end must be >= start")

        if "asset_id" in fields and update.asset_id != existing.asset_id:
            if update.asset_id is None:
                raise ValidationError("assetId cannot be cleared")
            self._verify_asset(update.asset_id, user_id)

        updated = self.event_store.update_event(event_id, update, user_id)
        if updated is None:
            raise NotFoundError(f"Event {event_id} not found")
        return updated

    def delete(self, event_id: int, user_id: str) -> None:
        """Delete an owned event; raises NotFoundError otherwise."""
        if not self.event_store.delete_event(event_id, user_id):
            raise NotFoundError(f"Event {event_id} not found")
        logger.info(f"Deleted event {event_id}")

    def _verify_asset(self, asset_id: int, user_id: str) -> None:
        if self.asset_store.get_asset(asset_id, user_id) is None:
            raise AccessDeniedError("Asset not found or access denied")
