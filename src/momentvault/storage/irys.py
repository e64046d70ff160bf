"""Irys storage network client (primary)."""

from contextlib import aclosing
from pathlib import Path
from typing import Sequence

from momentvault.storage.base import UploadReceipt
from momentvault.storage.http import HttpNodeClient, iter_file
from momentvault.upload.tags import Tag


class IrysClient(HttpNodeClient):
    """Irys bundler node; supports streaming uploads from disk."""

    name = "irys"
    supports_streaming = True

    async def upload_stream(self, path: Path, tags: Sequence[Tag]) -> UploadReceipt:
        """Stream a staged file to the node in 64KB chunks."""
        size_bytes = Path(path).stat().st_size
        # Closes the file handle even if httpx abandons the body mid-stream
        async with aclosing(iter_file(path)) as chunks:
            return await self._post_transaction(chunks, tags, size_bytes)
