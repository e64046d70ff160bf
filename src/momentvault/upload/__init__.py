"""Upload pipeline: content classification, funding preflight and hybrid upload strategy."""

from momentvault.upload.content_types import classify
from momentvault.upload.exceptions import (
    EmptyPayloadError,
    FundingTransactionError,
    MomentVaultError,
    NetworkQueryError,
    PayloadTooLargeError,
    UploadError,
)

__all__ = [
    "classify",
    "EmptyPayloadError",
    "FundingTransactionError",
    "MomentVaultError",
    "NetworkQueryError",
    "PayloadTooLargeError",
    "UploadError",
]
