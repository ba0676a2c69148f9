"""Storage layer for events, notifications and assets."""

from assetcal.storage.asset_store import SqlAssetStore
from assetcal.storage.base import AssetStore, EventStore, NotificationStore
from assetcal.storage.database import Database
from assetcal.storage.event_store import SqlEventStore
from assetcal.storage.notification_store import SqlNotificationStore

__all__ = [
    "AssetStore",
    "Database",
    "EventStore",
    "NotificationStore",
    "SqlAssetStore",
    "SqlEventStore",
    "SqlNotificationStore",
]
