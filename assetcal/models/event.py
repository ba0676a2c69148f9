"""Calendar event models with Pydantic v2 validation."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from assetcal.constants import DERIVED_ORIGIN_PREFIX, USER_ORIGIN
from assetcal.time_utils import ensure_utc


class ReminderMethod(str, Enum):
    """How a reminder is surfaced to the user."""

    EMAIL = "email"
    POPUP = "popup"


class ReminderOverride(BaseModel):
    """A single reminder offset before the event start."""

    method: ReminderMethod = ReminderMethod.POPUP
    minutes: int = Field(ge=0)


class ReminderSettings(BaseModel):
    """Reminder configuration stored on an event.

    Serialized with camelCase keys (``useDefault``) to stay compatible with
    the JSON clients already send.
    """

    model_config = ConfigDict(populate_by_name=True)

    use_default: bool = Field(default=False, alias="useDefault")
    overrides: list[ReminderOverride] = Field(default_factory=list)

    def to_json(self) -> dict:
        """Convert to the stored JSON shape."""
        return self.model_dump(by_alias=True, mode="json")


def derived_origin(kind: str) -> str:
    """Origin tag for an event derived from tracked expiry ``kind``."""
    return f"{DERIVED_ORIGIN_PREFIX}{kind}"


def origin_kind(origin: str | None) -> str | None:
    """Return the derived kind encoded in ``origin``, or None for user events."""
    if origin and origin.startswith(DERIVED_ORIGIN_PREFIX):
        return origin[len(DERIVED_ORIGIN_PREFIX) :] or None
    return None


class CalendarEvent(BaseModel):
    """Persisted calendar event."""

    id: int
    user_id: str
    asset_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    color: Optional[str] = None
    start: datetime
    end: datetime
    reminders: Optional[ReminderSettings] = None
    origin: str = USER_ORIGIN
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start", "end", "created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, v):
        """Store every timestamp as aware UTC."""
        if v is None:
            return None
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_range(self):
        """Validate that the event does not end before it starts."""
        if self.end < self.start:
            raise ValueError("end must be >= start")
        return self

    @computed_field
    @property
    def derived_kind(self) -> Optional[str]:
        """Tracked expiry kind for derived events, None for user events."""
        return origin_kind(self.origin)

    @property
    def is_derived(self) -> bool:
        """True if the synchronizer owns this event's schedule."""
        return self.derived_kind is not None

    def to_api(self) -> dict:
        """Convert to the camelCase JSON shape used by the HTTP API."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "assetId": self.asset_id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "color": self.color,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "reminders": self.reminders.to_json() if self.reminders else None,
            "origin": self.origin,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class CalendarEventCreate(BaseModel):
    """Validated input for creating an event."""

    model_config = ConfigDict(populate_by_name=True)

    asset_id: int = Field(alias="assetId", gt=0)
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    location: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=50)
    start: datetime
    end: datetime
    reminders: Optional[ReminderSettings] = None
    origin: str = USER_ORIGIN

    @field_validator("start", "end")
    @classmethod
    def normalize_timestamps(cls, v: datetime) -> datetime:
        """Store timestamps as aware UTC."""
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_range(self):
        """Validate that the event does not end before it starts."""
        if self.end < self.start:
            raise ValueError("end must be >= start")
        return self


class CalendarEventUpdate(BaseModel):
    """Partial update; only fields explicitly set are applied."""

    model_config = ConfigDict(populate_by_name=True)

    asset_id: Optional[int] = Field(default=None, alias="assetId", gt=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    location: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=50)
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    reminders: Optional[ReminderSettings] = None
    origin: Optional[str] = None

    @field_validator("start", "end")
    @classmethod
    def normalize_timestamps(cls, v):
        """Store timestamps as aware UTC."""
        if v is None:
            return None
        return ensure_utc(v)

    def changes(self) -> dict:
        """Fields the caller actually set, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    @property
    def touches_schedule(self) -> bool:
        """True if the update would move the event or change its origin."""
        return bool({"start", "end", "origin"} & self.model_fields_set)
