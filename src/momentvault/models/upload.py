"""Upload data models."""

from typing import Literal

from pydantic import BaseModel


class FileMetadata(BaseModel):
    """Metadata about the received file."""

    original_name: str
    size_bytes: int
    content_type: str


class UploadResponse(BaseModel):
    """Response model for file upload."""

    url: str
    uri: str
    transaction_id: str
    network: str
    upload_path: Literal["direct", "streaming"]
    metadata: FileMetadata


class FundingStatusResponse(BaseModel):
    """Response model for the funding status check."""

    network: str
    size_bytes: int
    price: int
    balance: int
    has_sufficient_funds: bool
