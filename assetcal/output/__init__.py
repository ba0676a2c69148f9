"""Export layer for calendar events."""

from assetcal.output.base import EventWriter
from assetcal.output.ics_writer import ICSWriter
from assetcal.output.json_writer import JSONWriter

WRITERS: dict[str, type] = {"ics": ICSWriter, "json": JSONWriter}

__all__ = [
    "EventWriter",
    "ICSWriter",
    "JSONWriter",
    "WRITERS",
]
