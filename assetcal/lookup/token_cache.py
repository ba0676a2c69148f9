"""Thread-safe cache for a single OAuth access token."""

import logging
import threading
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN_SECONDS = 3600
EARLY_REFRESH_SECONDS = 60
MIN_TTL_SECONDS = 30


def coerce_expires_in_seconds(value: Any) -> int:
    """Token lifetime from an ``expires_in`` field, defaulting to one hour."""
    if isinstance(value, bool):
        return DEFAULT_EXPIRES_IN_SECONDS
    if isinstance(value, (int, float)):
        return int(value) if value > 0 else DEFAULT_EXPIRES_IN_SECONDS
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) or DEFAULT_EXPIRES_IN_SECONDS
    return DEFAULT_EXPIRES_IN_SECONDS


class TokenCache:
    """Holds one access token and refreshes it shortly before it expires.

    Concurrent callers that find the token stale serialize on a lock and
    re-check freshness, so only one of them performs the refresh.
    """

    def __init__(
        self,
        fetch_token: Callable[[], tuple[str, Any]],
        clock: Callable[[], float] = time.monotonic,
        early_refresh_seconds: int = EARLY_REFRESH_SECONDS,
    ):
        """
        Initialize cache.

        Args:
            fetch_token: Returns ``(access_token, expires_in)`` from the
                token endpoint; raises on failure
            clock: Monotonic clock in seconds
            early_refresh_seconds: Refresh this long before expiry
        """
        self._fetch_token = fetch_token
        self._clock = clock
        self._early_refresh_seconds = early_refresh_seconds
        self._token: str | None = None
        self._expires_at: float | None = None
        self._lock = threading.Lock()
        self.refresh_count = 0

    def get_token(self, force_refresh: bool = False) -> str:
        """Cached token, refreshing it first if stale or ``force_refresh``."""
        if not force_refresh and self._is_fresh():
            return self._token

        with self._lock:
            if not force_refresh and self._is_fresh():
                return self._token
            self._refresh()
            return self._token

    def invalidate(self) -> None:
        """Drop the cached token (e.g. after a 401)."""
        with self._lock:
            self._token = None
            self._expires_at = None

    def _is_fresh(self) -> bool:
        if self._token is None or self._expires_at is None:
            return False
        return self._clock() < self._expires_at

    def _refresh(self) -> None:
        token, expires_in = self._fetch_token()
        ttl = max(coerce_expires_in_seconds(expires_in) - self._early_refresh_seconds, MIN_TTL_SECONDS)
        self._token = token
        self._expires_at = self._clock() + ttl
        self.refresh_count += 1
        logger.debug(f"Access token refreshed; valid for {ttl}s")
