"""Tests for exception classes."""

import pytest

from assetcal.exceptions import (
    AccessDeniedError,
    AssetCalError,
    DerivedEventLockedError,
    DuplicateNotificationError,
    NotFoundError,
    StoreError,
    TokenRefreshError,
    ValidationError,
    VehicleLookupError,
)


@pytest.mark.parametrize(
    "error_cls",
    [
        AccessDeniedError,
        DerivedEventLockedError,
        NotFoundError,
        StoreError,
        ValidationError,
        VehicleLookupError,
    ],
)
def test_domain_errors_share_base(error_cls):
    error = error_cls("Something went wrong")
    assert str(error) == "Something went wrong"
    assert isinstance(error, AssetCalError)


def test_duplicate_notification_is_store_error():
    """Test DuplicateNotificationError can be handled as a store failure."""
    assert isinstance(DuplicateNotificationError("dup"), StoreError)


def test_token_refresh_is_lookup_error():
    with pytest.raises(VehicleLookupError):
        raise TokenRefreshError("token endpoint down")
