"""Async factory for ready-to-use storage network clients."""

import logging
from typing import Dict, Optional, Type

import httpx

from momentvault.core.config import Settings, settings as default_settings
from momentvault.storage.base import StorageNetworkClient
from momentvault.storage.bundlr import BundlrClient
from momentvault.storage.http import HttpNodeClient
from momentvault.storage.irys import IrysClient

logger = logging.getLogger(__name__)

NETWORK_CLASSES: Dict[str, Type[HttpNodeClient]] = {
    "irys": IrysClient,
    "bundlr": BundlrClient,
}


def _endpoints(name: str, config: Settings) -> tuple[str, str]:
    if name == "irys":
        return config.IRYS_NODE_URL, config.IRYS_GATEWAY_URL
    return config.BUNDLR_NODE_URL, config.BUNDLR_GATEWAY_URL


async def create_storage_network(
    name: str,
    config: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> StorageNetworkClient:
    """Build a storage network client and wait until it is ready.

    Args:
        name: Network identifier ("irys" or "bundlr")
        config: Settings to read endpoints from, defaults to the singleton
        transport: Optional httpx transport override

    Returns:
        A client whose ``ready()`` probe has succeeded

    Raises:
        ValueError: If the network name is unknown
        NetworkQueryError: If the node is not reachable
    """
    config = config or default_settings
    client_class = NETWORK_CLASSES.get(name)
    if client_class is None:
        raise ValueError(f"Unknown storage network: {name}")

    node_url, gateway_url = _endpoints(name, config)
    client = client_class(
        node_url=node_url,
        gateway_url=gateway_url,
        token=config.PAYMENT_TOKEN,
        address=config.WALLET_ADDRESS,
        api_key=config.NODE_API_KEY,
        timeout=config.NETWORK_TIMEOUT,
        confirm_attempts=config.FUND_CONFIRM_ATTEMPTS,
        confirm_interval=config.FUND_CONFIRM_INTERVAL,
        transport=transport,
    )

    try:
        await client.ready()
    except Exception:
        await client.aclose()
        raise

    return client
