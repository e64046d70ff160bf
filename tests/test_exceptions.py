"""Smoke tests for upload exceptions."""

import pytest

from momentvault.upload.exceptions import (
    EmptyPayloadError,
    FundingTransactionError,
    MomentVaultError,
    NetworkQueryError,
    PayloadTooLargeError,
    UploadError,
)


def test_exception_hierarchy():
    """Test that all exceptions inherit from MomentVaultError."""
    for exc_class in (EmptyPayloadError, FundingTransactionError, NetworkQueryError, PayloadTooLargeError, UploadError):
        assert issubclass(exc_class, MomentVaultError)


@pytest.mark.parametrize(
    "exc_class,status_code",
    [
        (EmptyPayloadError, 400),
        (PayloadTooLargeError, 413),
        (NetworkQueryError, 503),
        (FundingTransactionError, 503),
        (UploadError, 500),
    ],
)
def test_status_codes(exc_class, status_code):
    """Each error maps to a client-facing status code."""
    assert exc_class("boom").status_code == status_code


def test_exceptions_can_be_caught_as_base():
    """Test that specific exceptions can be caught as MomentVaultError."""
    with pytest.raises(MomentVaultError):
        raise PayloadTooLargeError("Test error")
