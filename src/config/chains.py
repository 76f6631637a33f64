"""
Chain-specific configuration for the fleet trade core.
"""

from dataclasses import dataclass, field
from typing import Dict

from .base import BaseConfig


@dataclass
class ChainConfig(BaseConfig):
    """Chain-specific configuration for the supported Base networks."""

    # Active network: "base" or "base-sepolia"
    APP_NETWORK: str = field(
        default_factory=lambda: BaseConfig.get_env("APP_NETWORK", "base")
    )

    BASE_RPC_URL: str = field(
        default_factory=lambda: BaseConfig.get_env("BASE_RPC_URL", "https://mainnet.base.org")
    )
    BASE_SEPOLIA_RPC_URL: str = field(
        default_factory=lambda: BaseConfig.get_env(
            "BASE_SEPOLIA_RPC_URL", "https://sepolia.base.org"
        )
    )

    # Chain IDs
    BASE_CHAIN_ID: int = 8453
    BASE_SEPOLIA_CHAIN_ID: int = 84532

    @property
    def network(self) -> str:
        """Normalized network name; anything unrecognized means mainnet."""
        normalized = (self.APP_NETWORK or "base").strip().lower()
        if normalized in ("base-sepolia", "basesepolia"):
            return "base-sepolia"
        return "base"

    @property
    def supported_chains(self) -> Dict[str, Dict]:
        """Get configuration for all supported chains."""
        return {
            "base": {
                "chain_id": self.BASE_CHAIN_ID,
                "rpc_url": self.BASE_RPC_URL,
                "native_token": "ETH",
                "explorer_url": "https://basescan.org",
            },
            "base-sepolia": {
                "chain_id": self.BASE_SEPOLIA_CHAIN_ID,
                "rpc_url": self.BASE_SEPOLIA_RPC_URL,
                "native_token": "ETH",
                "explorer_url": "https://sepolia.basescan.org",
            },
        }

    def get_chain_config(self, chain_name: str) -> Dict:
        """Get configuration for a specific chain."""
        if chain_name not in self.supported_chains:
            raise ValueError(f"Unsupported chain: {chain_name}")
        return self.supported_chains[chain_name]

    def get_rpc_url(self, chain_name: str) -> str:
        """Get RPC URL for a specific chain."""
        return self.get_chain_config(chain_name)["rpc_url"]

    def get_chain_id(self, chain_name: str) -> int:
        """Get chain ID for a specific chain."""
        return self.get_chain_config(chain_name)["chain_id"]

    @property
    def active_chain_id(self) -> int:
        """Chain ID of the network selected by APP_NETWORK."""
        return self.get_chain_id(self.network)

    @property
    def active_rpc_url(self) -> str:
        """RPC URL of the network selected by APP_NETWORK."""
        return self.get_rpc_url(self.network)
