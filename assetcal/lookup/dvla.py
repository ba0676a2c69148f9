"""DVLA Vehicle Enquiry Service client (tax due date)."""

import logging
from typing import Any, Optional

import httpx

from assetcal.exceptions import VehicleLookupError
from assetcal.lookup.base import normalize_registration, safe_error_message

logger = logging.getLogger(__name__)


class DvlaClient:
    """Looks up a vehicle record by registration using an API key."""

    def __init__(self, api_url: str, api_key: Optional[str], http_client: httpx.Client):
        self.api_url = api_url
        self.api_key = api_key
        self.http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def fetch_vehicle(self, registration: str) -> Optional[dict[str, Any]]:
        """
        Fetch the DVLA record for a registration.

        Args:
            registration: Registration mark in any spacing or case

        Returns:
            Vehicle record, or None when the client is not configured or the
            vehicle is unknown

        Raises:
            VehicleLookupError: On transport failure, an error status or an
                unreadable body
        """
        if not self.is_configured:
            logger.warning("DVLA_VES_API_KEY is not set; skipping DVLA vehicle lookup")
            return None

        normalized = normalize_registration(registration)
        try:
            response = self.http_client.post(
                self.api_url,
                json={"registrationNumber": normalized},
                headers={"x-api-key": self.api_key, "Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise VehicleLookupError(f"DVLA vehicle lookup request failed: {e}") from e

        if response.status_code == 404:
            logger.info(f"DVLA has no record for {normalized}")
            return None
        if not response.is_success:
            raise VehicleLookupError(
                f"DVLA vehicle lookup failed with status {response.status_code}: "
                f"{safe_error_message(response)}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise VehicleLookupError("Failed to parse DVLA response JSON") from e
        if not isinstance(payload, dict):
            raise VehicleLookupError("DVLA response is not a JSON object")
        return payload

    @staticmethod
    def tax_due_date(vehicle: Optional[dict[str, Any]]) -> Optional[str]:
        """``taxDueDate`` of a DVLA record, if present."""
        if not vehicle:
            return None
        value = vehicle.get("taxDueDate")
        return value if isinstance(value, str) and value.strip() else None
