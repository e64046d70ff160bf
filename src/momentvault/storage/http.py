"""Shared HTTP adapter for bundler-node storage networks."""

import asyncio
import json
import logging
from pathlib import Path
from typing import AsyncIterator, Optional, Sequence

import httpx
from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_fixed

from momentvault.storage.base import FundingReceipt, StorageNetworkClient, UploadReceipt
from momentvault.upload.exceptions import FundingTransactionError, NetworkQueryError, UploadError
from momentvault.upload.tags import Tag

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536  # 64KB


class HttpNodeClient(StorageNetworkClient):
    """Storage network client speaking a bundler node's REST API.

    Price and balance are plain GETs; funding posts a top-up request and
    polls its confirmation; uploads post the raw payload with tags in the
    ``x-tags`` header.
    """

    def __init__(
        self,
        node_url: str,
        gateway_url: str,
        token: str,
        address: str,
        api_key: str = "",
        timeout: float = 1800,
        confirm_attempts: int = 10,
        confirm_interval: float = 3.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.node_url = node_url.rstrip("/")
        self._gateway = gateway_url.rstrip("/")
        self.token = token
        self.address = address
        self.confirm_attempts = confirm_attempts
        self.confirm_interval = confirm_interval

        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = httpx.AsyncClient(
            base_url=self.node_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def ready(self) -> None:
        try:
            response = await self._client.get("/info")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                f"{self.name} node not reachable: {e}",
                extra={"network": self.name, "node_url": self.node_url},
            )
            raise NetworkQueryError(f"{self.name} node not reachable: {e}") from e

        logger.info(f"{self.name} client ready", extra={"network": self.name, "node_url": self.node_url})

    async def get_price(self, size_bytes: int) -> int:
        try:
            response = await self._client.get(f"/price/{self.token}/{size_bytes}")
            response.raise_for_status()
            return int(response.text.strip())
        except (httpx.HTTPError, ValueError) as e:
            raise NetworkQueryError(f"{self.name} price query failed: {e}") from e

    async def get_balance(self) -> int:
        try:
            response = await self._client.get(
                f"/account/balance/{self.token}", params={"address": self.address}
            )
            response.raise_for_status()
            return int(response.json()["balance"])
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise NetworkQueryError(f"{self.name} balance query failed: {e}") from e

    async def fund(self, amount: int) -> FundingReceipt:
        try:
            response = await self._client.post(
                f"/account/fund/{self.token}",
                json={"address": self.address, "amount": str(amount)},
            )
            response.raise_for_status()
            transaction_id = response.json()["id"]

            retrying = AsyncRetrying(
                stop=stop_after_attempt(self.confirm_attempts),
                wait=wait_fixed(self.confirm_interval),
                retry=retry_if_result(lambda confirmed: not confirmed),
                retry_error_callback=lambda retry_state: False,
            )
            confirmed = await retrying(self._is_fund_confirmed, transaction_id)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise FundingTransactionError(f"{self.name} funding of {amount} failed: {e}") from e

        if not confirmed:
            raise FundingTransactionError(
                f"{self.name} funding transaction {transaction_id} not confirmed "
                f"after {self.confirm_attempts} checks"
            )

        logger.info(
            f"{self.name} account funded",
            extra={"network": self.name, "amount": amount, "transaction_id": transaction_id},
        )
        return FundingReceipt(transaction_id=transaction_id, amount=amount)

    async def _is_fund_confirmed(self, transaction_id: str) -> bool:
        response = await self._client.get(f"/account/fund/{self.token}/{transaction_id}")
        response.raise_for_status()
        return bool(response.json().get("confirmed"))

    async def upload_buffer(self, data: bytes, tags: Sequence[Tag]) -> UploadReceipt:
        return await self._post_transaction(data, tags, len(data))

    async def _post_transaction(self, content, tags: Sequence[Tag], size_bytes: int) -> UploadReceipt:
        headers = {
            "Content-Type": "application/octet-stream",
            "Content-Length": str(size_bytes),
            "x-tags": json.dumps([tag.as_dict() for tag in tags]),
        }
        try:
            response = await self._client.post(f"/tx/{self.token}", content=content, headers=headers)
            response.raise_for_status()
            return UploadReceipt(id=response.json()["id"])
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise UploadError(f"{self.name} upload failed: {e}") from e

    def gateway_url(self, transaction_id: str) -> str:
        return f"{self._gateway}/{transaction_id}"

    async def aclose(self) -> None:
        await self._client.aclose()


async def iter_file(path: Path, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield a file's bytes in chunks without blocking the event loop."""
    with open(path, "rb") as f:
        while chunk := await asyncio.to_thread(f.read, chunk_size):
            yield chunk
