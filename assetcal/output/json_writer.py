"""JSON writer for calendar events."""

import json
from pathlib import Path
from typing import Iterable

from assetcal.models.event import CalendarEvent


class JSONWriter:
    """Writer for JSON event exports (same shape as the HTTP API)."""

    def write(self, events: Iterable[CalendarEvent], path: Path, name: str = "AssetCal") -> None:
        """Write events to a JSON file."""
        payload = {"name": name, "events": [event.to_api() for event in events]}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    def get_extension(self) -> str:
        """Returns file extension."""
        return "json"
