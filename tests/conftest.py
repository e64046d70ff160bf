"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from momentvault.storage.base import FundingReceipt, StorageNetworkClient, UploadReceipt
from momentvault.upload.exceptions import UploadError
from momentvault.upload.tags import Tag


class FakeNetwork(StorageNetworkClient):
    """In-memory storage network that records every call in order."""

    def __init__(
        self,
        name: str = "primary",
        price: int = 100,
        balance: int = 500,
        upload_id: str = "abc123",
        supports_streaming: bool = True,
        gateway: str = "https://gateway.example",
        scheme: str = "ref",
        fail_on: Optional[dict] = None,
    ):
        self.name = name
        self.price = price
        self.balance = balance
        self.upload_id = upload_id
        self.supports_streaming = supports_streaming
        self.gateway = gateway
        self.scheme = scheme
        self.fail_on = fail_on or {}
        self.calls: List[tuple] = []
        self.uploaded_tags: List[Tag] = []
        self.streamed_paths: List[Path] = []

    def _maybe_fail(self, method: str) -> None:
        if method in self.fail_on:
            raise self.fail_on[method]

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    def methods(self) -> List[str]:
        return [call[0] for call in self.calls]

    def tag_values(self) -> dict:
        return {tag.name: tag.value for tag in self.uploaded_tags}

    async def ready(self) -> None:
        self.calls.append(("ready",))

    async def get_price(self, size_bytes: int) -> int:
        self.calls.append(("get_price", size_bytes))
        self._maybe_fail("get_price")
        price = self.price
        await asyncio.sleep(0)
        return price

    async def get_balance(self) -> int:
        self.calls.append(("get_balance",))
        self._maybe_fail("get_balance")
        balance = self.balance
        await asyncio.sleep(0)
        return balance

    async def fund(self, amount: int) -> FundingReceipt:
        self.calls.append(("fund", amount))
        self._maybe_fail("fund")
        self.balance += amount
        return FundingReceipt(transaction_id=f"fund-{len(self.calls)}", amount=amount)

    async def upload_buffer(self, data: bytes, tags: Sequence[Tag]) -> UploadReceipt:
        self.calls.append(("upload_buffer", len(data)))
        self._maybe_fail("upload_buffer")
        self.uploaded_tags = list(tags)
        return UploadReceipt(id=self.upload_id)

    async def upload_stream(self, path: Path, tags: Sequence[Tag]) -> UploadReceipt:
        if not self.supports_streaming:
            return await super().upload_stream(path, tags)
        self.calls.append(("upload_stream", Path(path).stat().st_size))
        self.streamed_paths.append(Path(path))
        self._maybe_fail("upload_stream")
        self.uploaded_tags = list(tags)
        return UploadReceipt(id=self.upload_id)

    def gateway_url(self, transaction_id: str) -> str:
        return f"{self.gateway}/{transaction_id}"

    def protocol_uri(self, transaction_id: str) -> str:
        return f"{self.scheme}://{transaction_id}"


@pytest.fixture
def primary():
    """Primary network with enough balance."""
    return FakeNetwork(name="primary")


@pytest.fixture
def secondary():
    """Secondary network, buffer-only."""
    return FakeNetwork(
        name="secondary",
        upload_id="sec456",
        supports_streaming=False,
        gateway="https://arweave.example",
        scheme="ar",
    )


@pytest.fixture
def failing_primary():
    """Primary network whose uploads always fail."""
    return FakeNetwork(
        name="primary",
        fail_on={
            "upload_buffer": UploadError("primary rejected buffer"),
            "upload_stream": UploadError("primary rejected stream"),
        },
    )


@pytest.fixture
def staging_dir(tmp_path):
    """Empty scratch directory for staging files."""
    path = tmp_path / "staging"
    path.mkdir()
    return path
