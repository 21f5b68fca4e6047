"""Application configuration."""
import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("error", "warn", "warning", "info", "debug")


class Settings(BaseSettings):
    """Signer settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Safe
    safe_address: str = Field(..., pattern=r"^0x[a-fA-F0-9]{40}$")
    safe_api_key: str = Field(..., min_length=1, repr=False)
    safe_tx_service_url: str = "https://api.safe.global/tx-service"

    # Chains (comma-separated chain ids)
    enabled_chains: str

    # RPC URLs (optional, public defaults otherwise)
    ethereum_rpc_url: str = "https://eth.blockrazor.xyz"
    polygon_rpc_url: str = "https://polygon.drpc.org"
    arbitrum_rpc_url: str = "https://arbitrum.drpc.org"
    optimism_rpc_url: str = "https://1rpc.io/op"
    gnosis_rpc_url: str = "https://gnosis.drpc.org"
    base_rpc_url: str = "https://base-rpc.publicnode.com"
    sonic_rpc_url: str = "https://sonic.drpc.org"

    # Operator key (NEVER logged)
    private_key: str = Field(..., pattern=r"^0x[a-fA-F0-9]{64}$", repr=False)

    # Bot behaviour
    polling_interval: int = Field(default=30000, ge=5000, description="Polling interval in ms")
    api_rate_limit: int = Field(default=4, ge=1, le=10, description="Max concurrent service calls")
    inter_chain_delay_ms: int = Field(default=250, ge=0)
    message_confirmations_required: int = Field(default=2, ge=1)
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Deny list
    trusted_delegate_contracts: str = ""

    # Logging
    log_level: str = "info"
    log_dir: str = "logs"

    # Environment
    environment: str = "development"

    # Operator API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @field_validator("enabled_chains")
    @classmethod
    def check_enabled_chains(cls, value: str) -> str:
        """Every entry must be an integer chain id."""
        for item in value.split(","):
            if item.strip() and not item.strip().isdigit():
                raise ValueError(f"Invalid chain id: {item.strip()!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("environment")
    @classmethod
    def check_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("development", "production", "test"):
            raise ValueError("environment must be development, production or test")
        return value

    @property
    def enabled_chain_ids(self) -> List[int]:
        """Parse enabled chain ids, keeping configured order."""
        return [int(item.strip()) for item in self.enabled_chains.split(",") if item.strip()]

    @property
    def trusted_delegate_addresses(self) -> List[str]:
        """Parse trusted delegate call targets."""
        return [
            addr.lower().strip()
            for addr in self.trusted_delegate_contracts.split(",")
            if addr.strip()
        ]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    logger = logging.getLogger(__name__)

    settings = Settings()

    logger.info(
        f"Settings loaded - SAFE_ADDRESS: {settings.safe_address}, "
        f"ENABLED_CHAINS: {settings.enabled_chains}, POLLING_INTERVAL: {settings.polling_interval}ms"
    )

    return settings
