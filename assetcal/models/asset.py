"""Asset model (vehicles, properties, ...)."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from assetcal.constants import DEFAULT_TABS


class Asset(BaseModel):
    """An owned asset; vehicles carry maintenance dates in ``metadata``."""

    id: int
    user_id: str
    name: Optional[str] = None
    type: str
    registration_number: Optional[str] = None
    tabs: list[str] = Field(default_factory=lambda: list(DEFAULT_TABS))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_vehicle(self) -> bool:
        """True for vehicle assets."""
        return self.type == "vehicle"

    def maintenance_entry(self, key: str) -> dict[str, Any]:
        """Return ``metadata.maintenance.<key>`` or an empty dict."""
        maintenance = self.metadata.get("maintenance") or {}
        if not isinstance(maintenance, dict):
            return {}
        entry = maintenance.get(key) or {}
        return entry if isinstance(entry, dict) else {}
