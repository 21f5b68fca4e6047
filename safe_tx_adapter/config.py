"""Configuration settings for the Safe Transaction Service adapter."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.safe.global/tx-service"

# Chain id -> network short name used in the hosted transaction service URL.
TX_SERVICE_SHORT_NAMES: dict[int, str] = {
    1: "eth",
    10: "oeth",
    100: "gno",
    137: "pol",
    146: "sonic",
    8453: "base",
    42161: "arb1",
}


class SafeTxServiceSettings(BaseSettings):
    """Safe Transaction Service API configuration.

    All settings can be configured via environment variables with SAFE_TX_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAFE_TX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        description="API key for the hosted Safe Transaction Service",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Transaction service gateway URL (network short name is appended)",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=3,
        description="Number of attempts for read requests",
    )
    retry_min_wait_seconds: float = Field(
        default=1.0,
        description="Minimum wait time between retries in seconds",
    )
    retry_max_wait_seconds: float = Field(
        default=10.0,
        description="Maximum wait time between retries in seconds",
    )
    max_pages: int = Field(
        default=20,
        ge=1,
        description="Upper bound on pages followed for a single list call",
    )
