"""
Configuration management for the fleet trade core.

Use get_config() to access all configuration settings.

Example:
    from src.config import get_config

    config = get_config()

    # Active chain settings
    chain_id = config.chains.active_chain_id

    # Bundler settings (requires BUNDLER_PRIMARY_URL or a pimlico URL)
    primary = config.bundler.primary
"""

from .base import BaseConfig, ConfigError
from .bundler import BundlerConfig, BundlerProviderConfig, BundlerRouterConfig
from .chains import ChainConfig
from .manager import ConfigManager, get_config, reload_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "BundlerConfig",
    "BundlerProviderConfig",
    "BundlerRouterConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
