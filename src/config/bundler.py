"""
Bundler (ERC-4337 relay) configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

from .base import BaseConfig, ConfigError
from .chains import ChainConfig

DEFAULT_ENTRY_POINT = "0x5FF137D4b0FDCD49DcA30c7CF57E578a026d2789"


@dataclass(frozen=True)
class BundlerProviderConfig:
    """One relay endpoint."""

    name: str
    rpc_url: str
    entry_point: str


@dataclass(frozen=True)
class BundlerRouterConfig:
    """Timing settings shared by both relays."""

    send_timeout_ms: int = 2_000
    receipt_poll_ms: int = 2_000
    receipt_timeout_ms: int = 120_000


@dataclass
class BundlerConfig(BaseConfig):
    """
    Primary/secondary bundler configuration sourced from the environment.

    Exactly one primary is required. The secondary is only configured when
    BUNDLER_SECONDARY_URL is set.
    """

    chains: ChainConfig = field(default_factory=ChainConfig)

    PRIMARY_NAME: str = field(
        default_factory=lambda: BaseConfig.get_env("BUNDLER_PRIMARY_NAME", "primary")
    )
    PRIMARY_URL: Optional[str] = field(
        default_factory=lambda: BaseConfig.get_env("BUNDLER_PRIMARY_URL")
    )
    SECONDARY_NAME: str = field(
        default_factory=lambda: BaseConfig.get_env("BUNDLER_SECONDARY_NAME", "secondary")
    )
    SECONDARY_URL: Optional[str] = field(
        default_factory=lambda: BaseConfig.get_env("BUNDLER_SECONDARY_URL")
    )
    ENTRY_POINT: str = field(
        default_factory=lambda: BaseConfig.get_env("BUNDLER_ENTRYPOINT", DEFAULT_ENTRY_POINT)
    )
    SEND_TIMEOUT_MS: int = field(
        default_factory=lambda: BaseConfig.get_env_positive_int("BUNDLER_SEND_TIMEOUT_MS", 2_000)
    )
    RECEIPT_POLL_MS: int = field(
        default_factory=lambda: BaseConfig.get_env_positive_int("BUNDLER_RECEIPT_POLL_MS", 2_000)
    )
    RECEIPT_TIMEOUT_MS: int = field(
        default_factory=lambda: BaseConfig.get_env_positive_int(
            "BUNDLER_RECEIPT_TIMEOUT_MS", 120_000
        )
    )

    def _validate_config(self):
        super()._validate_config()
        self._resolve_primary_url()

    def _resolve_primary_url(self) -> str:
        if self.PRIMARY_URL:
            return self.PRIMARY_URL

        if self.PRIMARY_NAME.lower() == "pimlico":
            chain_id = self.chains.active_chain_id
            if chain_id == self.chains.BASE_SEPOLIA_CHAIN_ID:
                missing_var = "PIMLICO_BASE_SEPOLIA_BUNDLER_URL"
            else:
                missing_var = "PIMLICO_BASE_BUNDLER_URL"

            pimlico_url = BaseConfig.get_env(missing_var)
            if pimlico_url:
                return pimlico_url
            raise ConfigError(
                f"BUNDLER_PRIMARY_URL is not set and BUNDLER_PRIMARY_NAME=pimlico "
                f"but {missing_var} is missing for chainId={chain_id}"
            )

        raise ConfigError("BUNDLER_PRIMARY_URL is required")

    @property
    def chain_id(self) -> int:
        return self.chains.active_chain_id

    @property
    def primary(self) -> BundlerProviderConfig:
        return BundlerProviderConfig(
            name=self.PRIMARY_NAME,
            rpc_url=self._resolve_primary_url(),
            entry_point=self.ENTRY_POINT,
        )

    @property
    def secondary(self) -> Optional[BundlerProviderConfig]:
        if not self.SECONDARY_URL:
            return None
        return BundlerProviderConfig(
            name=self.SECONDARY_NAME,
            rpc_url=self.SECONDARY_URL,
            entry_point=self.ENTRY_POINT,
        )

    @property
    def router(self) -> BundlerRouterConfig:
        return BundlerRouterConfig(
            send_timeout_ms=self.SEND_TIMEOUT_MS,
            receipt_poll_ms=self.RECEIPT_POLL_MS,
            receipt_timeout_ms=self.RECEIPT_TIMEOUT_MS,
        )
