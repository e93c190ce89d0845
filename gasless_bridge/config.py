from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.constants import DEFAULT_PUBLIC_RPC_URLS, ALCHEMY_RPC_SLUGS
from .core.errors import UnsupportedChain


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Relay API
    relay_api_url: str = Field(
        default="https://api.relay.link",
        description="Relay API base URL",
        validation_alias=AliasChoices("relay_api_url", "relay_base_url", "RELAY_API_URL", "RELAY_BASE_URL"),
    )
    relay_api_key: str = Field(
        default="",
        description="Relay API key; bearer token for /quote and x-api-key for /execute",
    )
    request_timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")

    # Wallet
    user_private_key: str = Field(
        default="",
        description="Test key for the user's EOA; production signs in the connected wallet",
    )
    demo_user_address: str = Field(
        default="0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
        description="Placeholder EOA used when no key is configured",
    )
    dry_run: bool = Field(default=False, description="Quote and build requests without submitting")

    # Chain access
    alchemy_api_key: str = Field(default="", description="Alchemy API key")
    rpc_urls: Dict[int, str] = Field(
        default_factory=dict,
        description="Explicit JSON-RPC endpoint per chain id",
    )

    # Bridge parameters
    origin_chain_id: int = Field(default=42161, description="Origin chain (Arbitrum)")
    destination_chain_id: int = Field(default=8453, description="Destination chain (Base)")
    bridge_amount_eth: Decimal = Field(default=Decimal("0.001"), description="Amount of native ETH to bridge")
    max_subsidization_amount: str = Field(
        default="5000000",
        description="Per-request subsidy cap in USD with 6 decimals ($5)",
    )
    referrer: str = Field(default="relay-example-full-subsidy", description="Referrer tag sent to /execute")

    # Status polling
    poll_interval_seconds: float = Field(default=5.0, gt=0, description="Delay between status polls")
    poll_max_attempts: int = Field(default=60, ge=1, description="Status polls before giving up")

    log_level: str = Field(default="WARNING", description="Logging level")

    def rpc_url_for(self, chain_id: int) -> str:
        """Resolve the JSON-RPC endpoint for ``chain_id``.

        Explicit ``rpc_urls`` win, then Alchemy when a key is configured,
        then the chain's public endpoint.
        """
        explicit: Optional[str] = self.rpc_urls.get(chain_id)
        if explicit:
            return explicit
        slug = ALCHEMY_RPC_SLUGS.get(chain_id)
        if self.alchemy_api_key and slug:
            return f"https://{slug}.g.alchemy.com/v2/{self.alchemy_api_key}"
        public = DEFAULT_PUBLIC_RPC_URLS.get(chain_id)
        if public:
            return public
        raise UnsupportedChain(f"No RPC URL configured for chain {chain_id}", chain_id=chain_id)


# Global settings instance
settings = Settings()
