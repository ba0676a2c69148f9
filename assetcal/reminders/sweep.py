"""Periodic sweep that turns due reminder offsets into notification records."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from assetcal.constants import EVENT_REMINDER_TYPE
from assetcal.exceptions import DuplicateNotificationError, StoreError
from assetcal.models.event import CalendarEvent
from assetcal.models.notification import NotificationCreate
from assetcal.reminders.evaluator import due_offsets
from assetcal.storage.base import EventStore, NotificationStore
from assetcal.time_utils import ensure_utc

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Counters from one sweep pass."""

    created: int = 0
    scanned: int = 0
    duplicates: int = 0  # Offsets that already had a notification
    failed: int = 0  # Events or offsets skipped after an error
    truncated: bool = False  # Budget ran out before every event was processed


def build_reminder_notification(event: CalendarEvent, minutes: int) -> NotificationCreate:
    """Notification record for one due offset of an event."""
    return NotificationCreate(
        user_id=event.user_id,
        type=EVENT_REMINDER_TYPE,
        title=f'Reminder: "{event.name}" in {minutes} minutes',
        metadata={
            "type": EVENT_REMINDER_TYPE,
            "eventId": event.id,
            "eventName": event.name,
            "eventStart": event.start.isoformat(),
            "reminderMinutes": minutes,
            "assetId": event.asset_id,
        },
    )


class ReminderSweep:
    """Creates at most one notification per (event, offset) under repeated runs.

    Safe to invoke concurrently: the existence check avoids most redundant
    inserts and the store's uniqueness constraint rejects the rest, which are
    counted as duplicates rather than errors.
    """

    def __init__(
        self,
        event_store: EventStore,
        notification_store: NotificationStore,
        max_duration_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize sweep.

        Args:
            event_store: Source of candidate events
            notification_store: Destination for notification records
            max_duration_seconds: Wall-clock budget for one run (None = unbounded)
            clock: Monotonic clock used to enforce the budget
        """
        self.event_store = event_store
        self.notification_store = notification_store
        self.max_duration_seconds = max_duration_seconds
        self.clock = clock

    def run(self, now: datetime, grace_window: timedelta) -> SweepResult:
        """
        Perform one sweep.

        Args:
            now: Evaluation instant
            grace_window: How far back a missed trigger may still fire

        Returns:
            SweepResult with counters

        Raises:
            StoreError: If candidate events cannot be loaded or the
                notification store fails
        """
        now = ensure_utc(now)
        started = self.clock()
        result = SweepResult()

        # Coarse prefilter; the evaluator applies the exact window
        events = self.event_store.list_events_with_reminders(now - grace_window)
        logger.debug(f"Reminder sweep loaded {len(events)} candidate events")

        for index, event in enumerate(events):
            if self._budget_exhausted(started):
                result.truncated = True
                logger.warning(
                    f"Reminder sweep budget exhausted; {len(events) - index} events "
                    "left for the next run"
                )
                break

            result.scanned += 1
            try:
                offsets = due_offsets(event, now, grace_window)
            except Exception as e:
                result.failed += 1
                logger.error(f"Failed to evaluate reminders for event {event.id}: {e}")
                continue

            for minutes in sorted(offsets):
                self._notify(event, minutes, result)

        logger.info(
            f"Reminder sweep finished: created={result.created} "
            f"scanned={result.scanned} duplicates={result.duplicates} "
            f"failed={result.failed} truncated={result.truncated}"
        )
        return result

    def _notify(self, event: CalendarEvent, minutes: int, result: SweepResult) -> None:
        """Create the notification for one due offset unless it already exists."""
        try:
            if self.notification_store.exists_reminder(event.user_id, event.id, minutes):
                result.duplicates += 1
                return

            self.notification_store.create_notification(
                build_reminder_notification(event, minutes)
            )
        except DuplicateNotificationError:
            # Lost a race with an overlapping sweep; the record exists
            result.duplicates += 1
            logger.debug(f"Reminder for event {event.id} ({minutes}m) created concurrently")
            return
        except StoreError:
            raise
        except Exception as e:
            result.failed += 1
            logger.error(
                f"Failed to create reminder for event {event.id} ({minutes}m): {e}"
            )
            return

        result.created += 1
        logger.info(
            f"Event reminder notification created: event={event.id} "
            f"user={event.user_id} minutes={minutes}"
        )

    def _budget_exhausted(self, started: float) -> bool:
        if self.max_duration_seconds is None:
            return False
        return self.clock() - started >= self.max_duration_seconds
