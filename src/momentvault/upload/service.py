"""Process-wide HybridUploader built lazily from settings."""

import asyncio
import logging
from typing import Optional

from momentvault.core.config import settings
from momentvault.storage.factory import create_storage_network
from momentvault.upload.exceptions import NetworkQueryError
from momentvault.upload.selector import HybridUploader

logger = logging.getLogger(__name__)

_uploader: Optional[HybridUploader] = None
_init_lock = asyncio.Lock()


async def get_uploader() -> HybridUploader:
    """Return the shared uploader, connecting to the networks on first use.

    An unreachable secondary network disables the fallback instead of
    failing the request; an unreachable primary raises NetworkQueryError.
    """
    global _uploader

    if _uploader is not None:
        return _uploader

    async with _init_lock:
        if _uploader is None:
            primary = await create_storage_network(settings.PRIMARY_NETWORK)

            secondary = None
            if settings.SECONDARY_NETWORK:
                try:
                    secondary = await create_storage_network(settings.SECONDARY_NETWORK)
                except NetworkQueryError as e:
                    logger.warning(
                        f"Secondary network {settings.SECONDARY_NETWORK} unavailable, fallback disabled: {e}",
                        extra={"network": settings.SECONDARY_NETWORK},
                    )

            _uploader = HybridUploader.from_settings(primary, secondary)

    return _uploader


async def shutdown_uploader() -> None:
    """Close network clients held by the shared uploader."""
    global _uploader

    if _uploader is None:
        return

    await _uploader.primary.aclose()
    if _uploader.secondary is not None:
        await _uploader.secondary.aclose()
    _uploader = None
