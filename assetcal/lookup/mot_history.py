"""MOT history API client using OAuth2 client credentials."""

import logging
from typing import Any, Optional

import httpx

from assetcal.exceptions import TokenRefreshError, VehicleLookupError
from assetcal.lookup.base import normalize_registration, safe_error_message
from assetcal.lookup.token_cache import TokenCache

logger = logging.getLogger(__name__)


class MotHistoryClient:
    """Fetches MOT history; the bearer token lives in a ``TokenCache``."""

    def __init__(
        self,
        http_client: httpx.Client,
        token_url: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        scope: Optional[str] = None,
        vehicle_url: Optional[str] = None,
        api_key: Optional[str] = None,
        token_cache: Optional[TokenCache] = None,
    ):
        self.http_client = http_client
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.vehicle_url = vehicle_url
        self.api_key = api_key
        self.token_cache = token_cache or TokenCache(self._request_token)

    @property
    def is_configured(self) -> bool:
        """True when both the OAuth settings and the vehicle endpoint are set."""
        oauth = all([self.token_url, self.client_id, self.client_secret, self.scope])
        return oauth and bool(self.vehicle_url and self.api_key)

    def fetch_history(self, registration: str) -> Optional[dict[str, Any]]:
        """
        Fetch MOT history for a registration.

        Returns:
            History record, or None when not configured or the vehicle has
            no MOT record

        Raises:
            TokenRefreshError: If no access token could be obtained
            VehicleLookupError: On transport failure or an error status
        """
        if not self.is_configured:
            logger.warning("MOT history settings are not fully configured; skipping MOT lookup")
            return None

        normalized = normalize_registration(registration)
        response = self._get_vehicle(normalized, self.token_cache.get_token())
        if response.status_code == 401:
            # Token revoked early; retry once with a fresh one
            response = self._get_vehicle(
                normalized, self.token_cache.get_token(force_refresh=True)
            )

        if response.status_code == 404:
            logger.info(f"No MOT history for {normalized}")
            return None
        if not response.is_success:
            raise VehicleLookupError(
                f"MOT history lookup failed with status {response.status_code}: "
                f"{safe_error_message(response)}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise VehicleLookupError("Failed to parse MOT history response JSON") from e
        if not isinstance(payload, dict):
            raise VehicleLookupError("MOT history response is not a JSON object")
        return payload

    @staticmethod
    def mot_expiry(history: Optional[dict[str, Any]]) -> Optional[str]:
        """
        Current MOT expiry from a history record.

        Uses ``motExpiryDate`` when present (vehicles not yet tested),
        otherwise the latest ``expiryDate`` among the recorded tests.
        """
        if not history:
            return None
        value = history.get("motExpiryDate")
        if isinstance(value, str) and value.strip():
            return value

        expiries = [
            test.get("expiryDate")
            for test in history.get("motTests") or []
            if isinstance(test, dict) and isinstance(test.get("expiryDate"), str)
        ]
        # ISO dates sort lexicographically
        return max(expiries) if expiries else None

    def _get_vehicle(self, registration: str, token: str) -> httpx.Response:
        url = f"{self.vehicle_url.rstrip('/')}/{registration}"
        try:
            return self.http_client.get(
                url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "X-API-Key": self.api_key,
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise VehicleLookupError(f"MOT history request failed: {e}") from e

    def _request_token(self) -> tuple[str, Any]:
        """Client-credentials grant against the token endpoint."""
        try:
            response = self.http_client.post(
                self.token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "scope": self.scope,
                },
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TokenRefreshError(f"MOT token request failed: {e}") from e

        if not response.is_success:
            raise TokenRefreshError(
                f"Failed to obtain MOT access token (status {response.status_code}): "
                f"{safe_error_message(response)}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TokenRefreshError("MOT token endpoint returned invalid JSON") from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(access_token, str) or not access_token.strip():
            raise TokenRefreshError("MOT token response is missing access_token")
        return access_token.strip(), payload.get("expires_in")
