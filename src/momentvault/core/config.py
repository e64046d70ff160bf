"""Configuration management for Moment Vault."""

from pydantic_settings import BaseSettings, SettingsConfigDict

MB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    ENV: str = "local"
    SERVICE_NAME: str = "momentvault"
    SERVICE_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Storage networks
    PRIMARY_NETWORK: str = "irys"
    SECONDARY_NETWORK: str = "bundlr"
    IRYS_NODE_URL: str = "https://devnet.irys.xyz"
    IRYS_GATEWAY_URL: str = "https://gateway.irys.xyz"
    BUNDLR_NODE_URL: str = "https://node1.bundlr.network"
    BUNDLR_GATEWAY_URL: str = "https://arweave.net"
    PAYMENT_TOKEN: str = "ethereum"
    WALLET_ADDRESS: str = ""
    NODE_API_KEY: str = ""
    NETWORK_TIMEOUT: int = 1800  # seconds, matches the HTTP layer's upload timeout

    # Funding
    FUND_CONFIRM_ATTEMPTS: int = 10
    FUND_CONFIRM_INTERVAL: float = 3.0  # seconds between confirmation polls
    FUNDING_MARGIN: int = 0  # atomic units added on top of the exact deficit
    SERIALIZE_FUNDING: bool = False

    # Upload constraints
    MAX_UPLOAD_MB: int = 6 * 1024
    STREAMING_THRESHOLD_MB: int = 1024  # Files larger than this are staged to disk
    FALLBACK_CEILING_MB: int = 500  # Files smaller than this may fall back to the secondary
    STAGING_DIR: str = "./data/staging"

    @property
    def max_upload_bytes(self) -> int:
        """Convert MAX_UPLOAD_MB to bytes."""
        return self.MAX_UPLOAD_MB * MB

    @property
    def streaming_threshold_bytes(self) -> int:
        """Convert STREAMING_THRESHOLD_MB to bytes."""
        return self.STREAMING_THRESHOLD_MB * MB

    @property
    def fallback_ceiling_bytes(self) -> int:
        """Convert FALLBACK_CEILING_MB to bytes."""
        return self.FALLBACK_CEILING_MB * MB


# Singleton settings instance
settings = Settings()
