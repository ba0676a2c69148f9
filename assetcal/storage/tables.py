"""ORM table definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from assetcal.constants import USER_ORIGIN
from assetcal.time_utils import ensure_utc, utc_now

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """Timestamp stored as naive UTC and returned as aware UTC.

    SQLite drops tzinfo, so normalization happens at the column boundary.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ensure_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class AssetRow(Base):
    """Owned asset (vehicle, property, ...)."""

    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(Text)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    registration_number: Mapped[Optional[str]] = mapped_column(Text)
    tabs: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utc_now, onupdate=utc_now
    )


class CalendarEventRow(Base):
    """Calendar event; ``origin`` is ``user`` or ``derived:<kind>``."""

    __tablename__ = "calendar_events"
    __table_args__ = (
        Index("ix_calendar_events_start", "start"),
        Index("ix_calendar_events_asset_id", "asset_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_id: Mapped[Optional[int]] = mapped_column(ForeignKey("assets.id"))
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    location: Mapped[Optional[str]] = mapped_column(Text)
    color: Mapped[Optional[str]] = mapped_column(Text)
    start: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    # None is stored as SQL NULL so "has reminders" is a plain IS NOT NULL
    reminders: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON(none_as_null=True))
    origin: Mapped[str] = mapped_column(Text, nullable=False, default=USER_ORIGIN)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utc_now, onupdate=utc_now
    )


class NotificationRow(Base):
    """Notification record.

    ``event_id``/``reminder_minutes`` mirror the metadata of reminder
    notifications and carry the uniqueness constraint. They are NULL for
    other notification types, and NULLs never collide.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "type",
            "event_id",
            "reminder_minutes",
            name="uq_notifications_event_reminder",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    metadata_: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", JSON(none_as_null=True))
    event_id: Mapped[Optional[int]] = mapped_column(Integer)
    reminder_minutes: Mapped[Optional[int]] = mapped_column(Integer)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
