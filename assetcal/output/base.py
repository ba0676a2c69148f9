"""Base classes for event writers."""

from pathlib import Path
from typing import Iterable, Protocol

from assetcal.models.event import CalendarEvent


class EventWriter(Protocol):
    """Protocol for event export writers."""

    def write(self, events: Iterable[CalendarEvent], path: Path, name: str = "AssetCal") -> None:
        """Write events to file path."""
        ...

    def get_extension(self) -> str:
        """Returns file extension (e.g., 'ics', 'json')."""
        ...
