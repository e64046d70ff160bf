"""Bundlr storage network client (secondary)."""

from momentvault.storage.http import HttpNodeClient


class BundlrClient(HttpNodeClient):
    """Bundlr bundler node; in-memory uploads only."""

    name = "bundlr"
    supports_streaming = False
