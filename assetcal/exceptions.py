"""Exception hierarchy for asset calendar operations."""


class AssetCalError(Exception):
    """Base exception for asset calendar operations."""

    pass


class StoreError(AssetCalError):
    """Event or notification store unreachable or failing."""

    pass


class DuplicateNotificationError(StoreError):
    """Notification rejected by the store's uniqueness constraint."""

    pass


class NotFoundError(AssetCalError):
    """Requested record does not exist for this user."""

    pass


class AccessDeniedError(AssetCalError):
    """Asset not found or not owned by the acting user."""

    pass


class ValidationError(AssetCalError):
    """Input failed validation."""

    pass


class DerivedEventLockedError(AssetCalError):
    """Attempt to reschedule an event managed by the synchronizer."""

    pass


class VehicleLookupError(AssetCalError):
    """Error while querying an external vehicle data source."""

    pass


class TokenRefreshError(VehicleLookupError):
    """OAuth access token could not be obtained."""

    pass
