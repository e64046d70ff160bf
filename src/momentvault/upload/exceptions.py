"""Custom exceptions for the upload pipeline."""


class MomentVaultError(Exception):
    """Base exception for upload orchestration."""

    status_code = 500


class EmptyPayloadError(MomentVaultError):
    """Exception raised when the payload has no bytes."""

    status_code = 400


class PayloadTooLargeError(MomentVaultError):
    """Exception raised when the payload exceeds the absolute size ceiling."""

    status_code = 413


class NetworkQueryError(MomentVaultError):
    """Exception raised when a price, balance or readiness query fails."""

    status_code = 503


class FundingTransactionError(MomentVaultError):
    """Exception raised when a top-up transaction fails to confirm."""

    status_code = 503


class UploadError(MomentVaultError):
    """Exception raised when storing the payload fails."""

    status_code = 500
