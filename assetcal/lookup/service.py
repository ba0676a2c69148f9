"""Combines the DVLA and MOT history sources into tracked expiry dates."""

import logging
from datetime import date, tzinfo
from typing import Optional

import httpx

from assetcal.config import AssetCalConfig
from assetcal.derived.vehicle import MOT_KIND, TAX_KIND
from assetcal.lookup.base import normalize_registration
from assetcal.lookup.dvla import DvlaClient
from assetcal.lookup.mot_history import MotHistoryClient
from assetcal.time_utils import parse_expiry_date

logger = logging.getLogger(__name__)


class VehicleLookupService:
    """Fetch MOT and tax expiry dates for a registration."""

    def __init__(self, dvla: DvlaClient, mot: MotHistoryClient, tz: tzinfo):
        self.dvla = dvla
        self.mot = mot
        self.tz = tz

    @classmethod
    def from_config(
        cls, config: AssetCalConfig, http_client: Optional[httpx.Client] = None
    ) -> "VehicleLookupService":
        """Build clients from configuration sharing one HTTP client."""
        client = http_client or httpx.Client(timeout=config.http_timeout_seconds)
        dvla = DvlaClient(config.dvla_ves_api_url, config.dvla_ves_api_key, client)
        mot = MotHistoryClient(
            client,
            token_url=config.mot_history_token_url,
            client_id=config.mot_history_client_id,
            client_secret=config.mot_history_client_secret,
            scope=config.mot_history_scope,
            vehicle_url=config.mot_history_vehicle_url,
            api_key=config.mot_history_api_key,
        )
        return cls(dvla, mot, config.tzinfo)

    def fetch_expiries(self, registration: str) -> dict[str, Optional[date]]:
        """
        Look up current expiry dates.

        Unconfigured sources are skipped and yield None for their kind.

        Args:
            registration: Registration mark in any spacing or case

        Returns:
            {"mot": date | None, "tax": date | None}

        Raises:
            ValueError: If the registration is blank
            VehicleLookupError: If a configured source fails
        """
        normalized = normalize_registration(registration)
        if not normalized:
            raise ValueError("Registration number is required")

        history = self.mot.fetch_history(normalized)
        vehicle = self.dvla.fetch_vehicle(normalized)

        expiries = {
            MOT_KIND: parse_expiry_date(MotHistoryClient.mot_expiry(history), self.tz),
            TAX_KIND: parse_expiry_date(DvlaClient.tax_due_date(vehicle), self.tz),
        }
        logger.info(
            f"Fetched expiries for {normalized}: mot={expiries[MOT_KIND]} tax={expiries[TAX_KIND]}"
        )
        return expiries
