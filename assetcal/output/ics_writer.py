"""ICS feed writer for calendar events."""

from datetime import timedelta
from pathlib import Path
from typing import Iterable

from icalendar import Alarm, Calendar, Event

from assetcal.models.event import CalendarEvent
from assetcal.time_utils import utc_now

PRODID = "-//AssetCal//Reminders//EN"


def event_uid(event: CalendarEvent) -> str:
    """Stable UID so re-imported feeds update events in place."""
    return f"assetcal-event-{event.id}"


class ICSWriter:
    """Writer for iCalendar feeds."""

    def to_calendar(self, events: Iterable[CalendarEvent], name: str = "AssetCal") -> Calendar:
        """Build an icalendar ``Calendar`` with one VEVENT per event."""
        cal = Calendar()
        cal.add("prodid", PRODID)
        cal.add("version", "2.0")
        cal.add("X-WR-CALNAME", name)

        stamp = utc_now()
        for event_model in events:
            event = Event()
            event.add("summary", event_model.name)
            event.add("uid", event_uid(event_model))
            event.add("dtstamp", stamp)
            event.add("dtstart", event_model.start)
            event.add("dtend", event_model.end)
            event.add("X-ASSETCAL-ORIGIN", event_model.origin)

            if event_model.description:
                event.add("description", event_model.description)
            if event_model.location:
                event.add("location", event_model.location)
            if event_model.color:
                event.add("color", event_model.color)

            if event_model.reminders:
                for override in event_model.reminders.overrides:
                    alarm = Alarm()
                    alarm.add("action", "DISPLAY")
                    alarm.add("description", event_model.name)
                    alarm.add("trigger", timedelta(minutes=-override.minutes))
                    event.add_component(alarm)

            cal.add_component(event)
        return cal

    def to_bytes(self, events: Iterable[CalendarEvent], name: str = "AssetCal") -> bytes:
        """Serialize events to ICS bytes."""
        return self.to_calendar(events, name).to_ical()

    def write(self, events: Iterable[CalendarEvent], path: Path, name: str = "AssetCal") -> None:
        """
        Write events to an ICS file.

        Args:
            events: Events to export
            path: Destination file
            name: Calendar display name

        Raises:
            IOError: If the file ends up empty
        """
        ical_content = self.to_bytes(events, name)
        with open(path, "wb") as f:
            f.write(ical_content)

        if path.stat().st_size == 0:
            raise IOError(f"File was created but is empty: {path}")

    def get_extension(self) -> str:
        """Returns file extension."""
        return "ics"
