"""External vehicle data sources."""

from assetcal.lookup.base import normalize_registration
from assetcal.lookup.dvla import DvlaClient
from assetcal.lookup.mot_history import MotHistoryClient
from assetcal.lookup.service import VehicleLookupService
from assetcal.lookup.token_cache import TokenCache

__all__ = [
    "DvlaClient",
    "MotHistoryClient",
    "TokenCache",
    "VehicleLookupService",
    "normalize_registration",
]
