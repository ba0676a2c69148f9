"""Keeps one derived calendar event per tracked expiry date of an asset."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Iterable, Optional

from assetcal.constants import CALENDAR_TAB, DERIVED_EVENT_COLOR, MINUTES_PER_DAY
from assetcal.exceptions import NotFoundError
from assetcal.models.event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    ReminderOverride,
    ReminderSettings,
    derived_origin,
)
from assetcal.storage.base import AssetStore, EventStore
from assetcal.time_utils import all_day_range, parse_expiry_date

logger = logging.getLogger(__name__)

# Popup reminders 30 days, 7 days and 1 day ahead
DEFAULT_REMINDER_DAYS = (30, 7, 1)


@dataclass(frozen=True)
class DerivedEventSpec:
    """How a tracked expiry kind maps onto a calendar event."""

    kind: str
    label: str
    legacy_marker: Optional[str] = None
    color: str = DERIVED_EVENT_COLOR
    reminder_days: tuple[int, ...] = DEFAULT_REMINDER_DAYS

    @property
    def event_name(self) -> str:
        return f"{self.label} Reminder"

    @property
    def origin(self) -> str:
        return derived_origin(self.kind)

    def default_reminders(self) -> ReminderSettings:
        """Reminder configuration applied to created and repaired events."""
        return ReminderSettings(
            use_default=False,
            overrides=[
                ReminderOverride(minutes=days * MINUTES_PER_DAY)
                for days in self.reminder_days
            ],
        )

    def is_legacy_match(self, event: CalendarEvent) -> bool:
        """True for a user-origin event tagged with the old description sentinel."""
        return (
            self.legacy_marker is not None
            and not event.is_derived
            and self.legacy_marker in (event.description or "")
        )


class DerivedEventRegistry:
    """Registry of expiry kinds the synchronizer knows how to manage."""

    def __init__(self, specs: Iterable[DerivedEventSpec] = ()):
        self._specs: dict[str, DerivedEventSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: DerivedEventSpec) -> None:
        """Add a kind; registering the same kind twice is an error."""
        if spec.kind in self._specs:
            raise ValueError(f"Derived event kind already registered: {spec.kind}")
        self._specs[spec.kind] = spec

    def get(self, kind: str) -> Optional[DerivedEventSpec]:
        return self._specs.get(kind)

    def kinds(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, kind: str) -> bool:
        return kind in self._specs


@dataclass
class ReconcileResult:
    """Outcome of reconciling one asset."""

    created: int = 0
    updated: int = 0
    failed: int = 0
    errors: dict[str, str] = field(default_factory=dict)  # Keyed by kind, or "calendar" for the tab write
    tabs: Optional[list[str]] = None  # Set only when the calendar tab was enabled

    def to_api(self) -> dict:
        """Convert to the JSON shape returned by the sync endpoint."""
        payload: dict[str, Any] = {
            "synced": True,
            "created": self.created,
            "updated": self.updated,
        }
        if self.tabs is not None:
            payload["tabs"] = self.tabs
        return payload


class DerivedEventSynchronizer:
    """Reconciles derived events with an asset's tracked expiry dates.

    Repeated runs with unchanged input perform no writes; after a date
    changes the next run moves the existing event instead of creating a
    second one.
    """

    def __init__(
        self,
        event_store: EventStore,
        asset_store: AssetStore,
        tz: tzinfo,
        registry: DerivedEventRegistry,
    ):
        """
        Initialize synchronizer.

        Args:
            event_store: Event persistence
            asset_store: Asset persistence (for the calendar tab)
            tz: Time zone anchoring all-day windows
            registry: Known expiry kinds
        """
        self.event_store = event_store
        self.asset_store = asset_store
        self.tz = tz
        self.registry = registry

    def reconcile(
        self,
        asset_id: int,
        user_id: str,
        tracked_expiries: dict[str, Any],
    ) -> ReconcileResult:
        """
        Bring derived events in line with the given expiry values.

        Args:
            asset_id: Asset the events belong to (ownership already verified)
            user_id: Owner of the asset
            tracked_expiries: Mapping of kind to expiry value (date, datetime,
                ISO string or None)

        Returns:
            ReconcileResult with counters and the new tab list if it changed

        Raises:
            StoreError: If the asset's events cannot be loaded
        """
        result = ReconcileResult()
        events = [
            e for e in self.event_store.list_events_for_asset(asset_id)
            if e.user_id == user_id
        ]

        for kind, value in tracked_expiries.items():
            spec = self.registry.get(kind)
            if spec is None:
                logger.warning(f"Ignoring unknown expiry kind '{kind}' for asset {asset_id}")
                continue

            day = parse_expiry_date(value, self.tz)
            if day is None:
                if value not in (None, ""):
                    logger.warning(
                        f"Unparseable {spec.label} expiry {value!r} for asset {asset_id}"
                    )
                continue

            try:
                outcome = self._reconcile_kind(spec, day, events, asset_id, user_id)
            except Exception as e:
                result.failed += 1
                result.errors[kind] = str(e)
                logger.error(f"Failed to sync {spec.label} event for asset {asset_id}: {e}")
                continue

            if outcome == "created":
                result.created += 1
            elif outcome == "updated":
                result.updated += 1

        if result.created > 0:
            try:
                result.tabs = self._enable_calendar_tab(asset_id, user_id)
            except Exception as e:
                result.errors[CALENDAR_TAB] = str(e)
                logger.error(f"Failed to enable calendar tab for asset {asset_id}: {e}")

        logger.info(
            f"Derived events synced for asset {asset_id}: created={result.created} "
            f"updated={result.updated} failed={result.failed}"
        )
        return result

    def _reconcile_kind(
        self,
        spec: DerivedEventSpec,
        day: date,
        events: list[CalendarEvent],
        asset_id: int,
        user_id: str,
    ) -> Optional[str]:
        """Create, update or leave the event for one kind.

        Returns:
            "created", "updated" or None when nothing was written
        """
        start, end = all_day_range(day, self.tz)
        existing, adopting = self._find_existing(spec, events)

        if existing is None:
            created = self.event_store.create_event(
                CalendarEventCreate(
                    asset_id=asset_id,
                    name=spec.event_name,
                    color=spec.color,
                    start=start,
                    end=end,
                    reminders=spec.default_reminders(),
                    origin=spec.origin,
                ),
                user_id,
            )
            events.append(created)
            logger.debug(f"Created {spec.label} event {created.id} on {day.isoformat()}")
            return "created"

        if not (adopting or self._needs_update(spec, existing, start)):
            return None

        patch = CalendarEventUpdate(
            start=start,
            end=end,
            reminders=spec.default_reminders(),
            origin=spec.origin,
        )
        if self.event_store.update_event(existing.id, patch, user_id) is None:
            raise NotFoundError(f"Event {existing.id} disappeared during sync")
        logger.debug(f"Updated {spec.label} event {existing.id} to {day.isoformat()}")
        return "updated"

    @staticmethod
    def _find_existing(
        spec: DerivedEventSpec, events: list[CalendarEvent]
    ) -> tuple[Optional[CalendarEvent], bool]:
        """First event owned by ``spec``, else the first legacy match.

        Returns:
            (event or None, True if the event still needs adopting)
        """
        for event in events:
            if event.origin == spec.origin:
                return event, False
        for event in events:
            if spec.is_legacy_match(event):
                return event, True
        return None, False

    @staticmethod
    def _needs_update(spec: DerivedEventSpec, event: CalendarEvent, start: datetime) -> bool:
        if event.start != start:
            return True
        overrides = event.reminders.overrides if event.reminders else []
        return len(overrides) < len(spec.reminder_days)

    def _enable_calendar_tab(self, asset_id: int, user_id: str) -> Optional[list[str]]:
        """Append the calendar tab if missing; returns the new tab list."""
        asset = self.asset_store.get_asset(asset_id, user_id)
        if asset is None or CALENDAR_TAB in asset.tabs:
            return None

        tabs = [*asset.tabs, CALENDAR_TAB]
        self.asset_store.update_asset(asset_id, {"tabs": tabs}, user_id)
        logger.info(f"Enabled calendar tab for asset {asset_id}")
        return tabs
