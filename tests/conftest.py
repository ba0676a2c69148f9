from datetime import datetime, timedelta, timezone

import pytest

from assetcal.config import AssetCalConfig
from assetcal.engine import AssetCalEngine
from assetcal.models.event import CalendarEventCreate, ReminderOverride, ReminderSettings
from assetcal.storage import Database, SqlAssetStore, SqlEventStore, SqlNotificationStore
from assetcal.web import create_app

USER = "user_1"
OTHER_USER = "user_2"

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def database(tmp_path):
    """File-backed SQLite database with the schema created."""
    db = Database(f"sqlite:///{tmp_path / 'assetcal.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def event_store(database):
    return SqlEventStore(database)


@pytest.fixture
def notification_store(database):
    return SqlNotificationStore(database)


@pytest.fixture
def asset_store(database):
    return SqlAssetStore(database)


@pytest.fixture
def vehicle(asset_store):
    """Vehicle owned by USER with MOT and tax expiry dates."""
    return asset_store.create_asset(
        user_id=USER,
        type="vehicle",
        name="Family car",
        registration_number="AB12 CDE",
        metadata={
            "maintenance": {
                "mot": {"expires": "2025-09-14"},
                "tax": {"expires": "2025-11-01"},
            }
        },
    )


@pytest.fixture
def make_event(event_store, asset_store):
    """Factory creating events through the store."""
    state = {"asset": None}

    def _make(
        start=NOW,
        minutes=(30,),
        name="Service",
        user_id=USER,
        asset_id=None,
        origin="user",
        duration=timedelta(hours=1),
        description=None,
    ):
        if asset_id is None:
            if state["asset"] is None:
                state["asset"] = asset_store.create_asset(user_id=user_id, type="property")
            asset_id = state["asset"].id
        reminders = None
        if minutes is not None:
            reminders = ReminderSettings(
                overrides=[ReminderOverride(minutes=m) for m in minutes]
            )
        return event_store.create_event(
            CalendarEventCreate(
                asset_id=asset_id,
                name=name,
                description=description,
                start=start,
                end=start + duration,
                reminders=reminders,
                origin=origin,
            ),
            user_id,
        )

    return _make


@pytest.fixture
def config(tmp_path):
    return AssetCalConfig(
        database_url=f"sqlite:///{tmp_path / 'assetcal.db'}",
        cron_secret="s3cret",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def engine(config, database):
    return AssetCalEngine(config, database=database)


@pytest.fixture
def app(engine):
    """Create and configure a Flask app for testing."""
    app = create_app(engine=engine)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
