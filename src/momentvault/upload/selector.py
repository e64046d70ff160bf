"""Hybrid upload strategy: direct vs. staged streaming, with one fallback."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union

from momentvault.core.config import Settings, settings as default_settings
from momentvault.storage.base import StorageNetworkClient
from momentvault.upload.content_types import classify
from momentvault.upload.exceptions import (
    EmptyPayloadError,
    MomentVaultError,
    PayloadTooLargeError,
    UploadError,
)
from momentvault.upload.funding import ensure_funded
from momentvault.upload.staging import staged_copy
from momentvault.upload.tags import build_direct_tags, build_streaming_tags

logger = logging.getLogger(__name__)

Payload = Union[bytes, bytearray, memoryview, BinaryIO]

GIB = 1024 * 1024 * 1024
MIB = 1024 * 1024


@dataclass
class UploadRequest:
    """Payload, its filename and its derived size."""

    source: Payload
    filename: str
    size: int

    @classmethod
    def from_source(cls, source: Payload, filename: str) -> "UploadRequest":
        if isinstance(source, (bytes, bytearray, memoryview)):
            size = len(source)
        else:
            source.seek(0, 2)
            size = source.tell()
            source.seek(0)
        return cls(source=source, filename=filename, size=size)

    def read_all(self) -> bytes:
        """Return the whole payload as bytes."""
        if isinstance(self.source, bytes):
            return self.source
        if isinstance(self.source, (bytearray, memoryview)):
            return bytes(self.source)
        self.source.seek(0)
        return self.source.read()


@dataclass(frozen=True)
class UploadResult:
    """Where a payload ended up."""

    url: str
    uri: str
    transaction_id: str
    network: str
    path: str


class HybridUploader:
    """Chooses how to get a payload onto a storage network.

    Payloads above the streaming threshold are staged to disk and streamed
    to the primary network; everything else is uploaded from memory. A
    failed primary attempt on a payload under the fallback ceiling is
    retried once, in memory, on the secondary network.
    """

    def __init__(
        self,
        primary: StorageNetworkClient,
        secondary: Optional[StorageNetworkClient] = None,
        max_upload_bytes: int = 6 * GIB,
        streaming_threshold_bytes: int = GIB,
        fallback_ceiling_bytes: int = 500 * MIB,
        staging_dir: Union[str, Path] = "./data/staging",
        funding_margin: int = 0,
        serialize_funding: bool = False,
    ):
        self.primary = primary
        self.secondary = secondary
        self.max_upload_bytes = max_upload_bytes
        self.streaming_threshold_bytes = streaming_threshold_bytes
        self.fallback_ceiling_bytes = fallback_ceiling_bytes
        self.staging_dir = Path(staging_dir)
        self.funding_margin = funding_margin
        self.serialize_funding = serialize_funding
        self._funding_locks: Dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(
        cls,
        primary: StorageNetworkClient,
        secondary: Optional[StorageNetworkClient] = None,
        config: Optional[Settings] = None,
    ) -> "HybridUploader":
        config = config or default_settings
        return cls(
            primary,
            secondary,
            max_upload_bytes=config.max_upload_bytes,
            streaming_threshold_bytes=config.streaming_threshold_bytes,
            fallback_ceiling_bytes=config.fallback_ceiling_bytes,
            staging_dir=config.STAGING_DIR,
            funding_margin=config.FUNDING_MARGIN,
            serialize_funding=config.SERIALIZE_FUNDING,
        )

    async def upload(self, source: Payload, filename: str) -> UploadResult:
        """Upload a payload and return its gateway URL, URI and transaction id.

        Raises:
            EmptyPayloadError: If the payload is empty
            PayloadTooLargeError: If the payload exceeds the size ceiling
            NetworkQueryError: If the primary price/balance query failed
            FundingTransactionError: If the primary top-up failed
            UploadError: If storing the payload failed
        """
        request = UploadRequest.from_source(source, filename)

        if request.size <= 0:
            raise EmptyPayloadError(f"{filename} is empty")
        if request.size > self.max_upload_bytes:
            raise PayloadTooLargeError(
                f"{filename} is {request.size} bytes, limit is {self.max_upload_bytes}"
            )

        try:
            if request.size > self.streaming_threshold_bytes:
                return await self._upload_streaming(self.primary, request)
            return await self._upload_direct(self.primary, request)
        except Exception as primary_error:
            logger.error(
                f"Primary upload to {self.primary.name} failed: {primary_error}",
                exc_info=True,
                extra={"network": self.primary.name, "file_name": filename, "size_bytes": request.size},
            )

            if self.secondary is not None and request.size < self.fallback_ceiling_bytes:
                logger.info(
                    f"Falling back to {self.secondary.name}",
                    extra={"network": self.secondary.name, "file_name": filename, "size_bytes": request.size},
                )
                try:
                    return await self._upload_direct(self.secondary, request)
                except Exception as secondary_error:
                    logger.error(
                        f"Fallback upload to {self.secondary.name} also failed: {secondary_error}",
                        exc_info=True,
                        extra={"network": self.secondary.name, "file_name": filename},
                    )

            if isinstance(primary_error, MomentVaultError):
                raise primary_error
            raise UploadError(f"Upload of {filename} failed: {primary_error}") from primary_error

    async def _upload_direct(self, network: StorageNetworkClient, request: UploadRequest) -> UploadResult:
        await ensure_funded(
            network, request.size, margin=self.funding_margin, lock=self._lock_for(network)
        )
        content_type = classify(request.filename)

        if isinstance(request.source, (bytes, bytearray, memoryview)):
            data = request.read_all()
        else:
            data = await asyncio.to_thread(request.read_all)

        tags = build_direct_tags(request.filename, content_type, data)
        receipt = await network.upload_buffer(data, tags)
        return self._result(network, receipt.id, "direct", request)

    async def _upload_streaming(self, network: StorageNetworkClient, request: UploadRequest) -> UploadResult:
        # Must run before staging and funding
        if not network.supports_streaming:
            raise UploadError(
                f"{network.name} cannot stream uploads; {request.filename} is {request.size} bytes, "
                f"in-memory limit is {self.streaming_threshold_bytes}"
            )

        async with staged_copy(request.source, request.filename, self.staging_dir) as staged_path:
            staged_size = staged_path.stat().st_size
            await ensure_funded(
                network, staged_size, margin=self.funding_margin, lock=self._lock_for(network)
            )
            content_type = classify(request.filename)
            tags = build_streaming_tags(request.filename, content_type, staged_size)
            receipt = await network.upload_stream(staged_path, tags)

        return self._result(network, receipt.id, "streaming", request)

    def _lock_for(self, network: StorageNetworkClient) -> Optional[asyncio.Lock]:
        if not self.serialize_funding:
            return None
        return self._funding_locks.setdefault(network.name, asyncio.Lock())

    def _result(
        self, network: StorageNetworkClient, transaction_id: str, path: str, request: UploadRequest
    ) -> UploadResult:
        result = UploadResult(
            url=network.gateway_url(transaction_id),
            uri=network.protocol_uri(transaction_id),
            transaction_id=transaction_id,
            network=network.name,
            path=path,
        )
        logger.info(
            f"Upload complete: {result.url}",
            extra={
                "network": network.name,
                "transaction_id": transaction_id,
                "upload_path": path,
                "file_name": request.filename,
                "size_bytes": request.size,
            },
        )
        return result
