"""Abstract storage network client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from momentvault.upload.tags import Tag


@dataclass(frozen=True)
class FundingReceipt:
    """Confirmed top-up transaction."""

    transaction_id: str
    amount: int


@dataclass(frozen=True)
class UploadReceipt:
    """Network acknowledgement of a stored object."""

    id: str


class StorageNetworkClient(ABC):
    """Abstract base class for pay-per-byte storage networks.

    Amounts are integer atomic units of the payment token (wei for
    ethereum). Instances handed to the upload pipeline must already be
    ready; use the async factory in ``momentvault.storage.factory``.
    """

    name: str = "abstract"
    supports_streaming: bool = False

    @abstractmethod
    async def ready(self) -> None:
        """Verify the network is reachable before first use.

        Raises:
            NetworkQueryError: If the node cannot be reached
        """
        pass

    @abstractmethod
    async def get_price(self, size_bytes: int) -> int:
        """Return the price to store ``size_bytes`` bytes.

        Raises:
            NetworkQueryError: If the query fails
        """
        pass

    @abstractmethod
    async def get_balance(self) -> int:
        """Return the account's spendable balance.

        Raises:
            NetworkQueryError: If the query fails
        """
        pass

    @abstractmethod
    async def fund(self, amount: int) -> FundingReceipt:
        """Top up the account and wait for confirmation.

        Raises:
            FundingTransactionError: If the transaction fails or never confirms
        """
        pass

    @abstractmethod
    async def upload_buffer(self, data: bytes, tags: Sequence[Tag]) -> UploadReceipt:
        """Store an in-memory payload.

        Raises:
            UploadError: If the network rejects the upload
        """
        pass

    async def upload_stream(self, path: Path, tags: Sequence[Tag]) -> UploadReceipt:
        """Store a payload streamed from a file on disk."""
        raise NotImplementedError(f"{self.name} does not support streaming uploads")

    @abstractmethod
    def gateway_url(self, transaction_id: str) -> str:
        """Return the HTTP gateway URL for a stored object."""
        pass

    def protocol_uri(self, transaction_id: str) -> str:
        """Return the protocol-scheme URI for a stored object."""
        return f"ar://{transaction_id}"

    async def aclose(self) -> None:
        """Release network resources."""
        pass
