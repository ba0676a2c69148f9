"""SQL-backed asset store."""

from typing import Any

from sqlalchemy import select

from assetcal.constants import DEFAULT_TABS
from assetcal.models.asset import Asset
from assetcal.storage.database import Database
from assetcal.storage.tables import AssetRow

# Columns a caller may change through update_asset
_UPDATABLE_FIELDS = {"name", "tabs", "metadata", "registration_number"}


def _to_asset(row: AssetRow) -> Asset:
    """Convert an ORM row into a model."""
    return Asset(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        type=row.type,
        registration_number=row.registration_number,
        tabs=list(row.tabs or DEFAULT_TABS),
        metadata=dict(row.metadata_ or {}),
    )


class SqlAssetStore:
    """Asset persistence with ownership scoping."""

    def __init__(self, database: Database):
        """Initialize with database (dependency injection)."""
        self.database = database

    def create_asset(
        self,
        user_id: str,
        type: str,
        name: str | None = None,
        registration_number: str | None = None,
        tabs: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Asset:
        """Insert an asset owned by ``user_id``."""
        row = AssetRow(
            user_id=user_id,
            type=type,
            name=name,
            registration_number=registration_number,
            tabs=list(tabs) if tabs is not None else list(DEFAULT_TABS),
            metadata_=metadata or {},
        )
        with self.database.session_scope() as session:
            session.add(row)
            session.flush()
            return _to_asset(row)

    def get_asset(self, asset_id: int, user_id: str) -> Asset | None:
        """Asset owned by ``user_id``, or None."""
        with self.database.session_scope() as session:
            row = self._get_owned_row(session, asset_id, user_id)
            return _to_asset(row) if row else None

    def update_asset(
        self, asset_id: int, changes: dict[str, Any], user_id: str
    ) -> Asset | None:
        """
        Update selected asset fields.

        Args:
            asset_id: Asset to update
            changes: Mapping of field name to new value (name, tabs,
                metadata, registration_number)
            user_id: Acting user; must own the asset

        Returns:
            Updated asset, or None if missing or not owned
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update asset fields: {', '.join(sorted(unknown))}")

        with self.database.session_scope() as session:
            row = self._get_owned_row(session, asset_id, user_id)
            if row is None:
                return None
            for field, value in changes.items():
                if field == "metadata":
                    row.metadata_ = value
                elif field == "tabs":
                    row.tabs = list(value)
                else:
                    setattr(row, field, value)
            session.flush()
            return _to_asset(row)

    @staticmethod
    def _get_owned_row(session, asset_id: int, user_id: str) -> AssetRow | None:
        stmt = select(AssetRow).where(AssetRow.id == asset_id, AssetRow.user_id == user_id)
        return session.scalars(stmt).first()
