"""
Unit tests for the configuration manager and the bundler composition root.
"""

import pytest

from src.bundler import BundlerRouter, HttpBundlerAdapter, create_bundler_router
from src.config import ConfigError, ConfigManager, reload_config


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_active_chain_for_mainnet(self, routing_env):
        config = ConfigManager()

        assert config.chains.network == "base"
        assert config.chains.active_chain_id == 8453

    def test_active_chain_for_sepolia(self, routing_env):
        routing_env.setenv("APP_NETWORK", "base-sepolia")

        config = ConfigManager()

        assert config.chains.active_chain_id == 84532
        assert config.chains.active_rpc_url == config.chains.BASE_SEPOLIA_RPC_URL

    def test_bundler_config_is_lazy(self, routing_env):
        routing_env.delenv("BUNDLER_PRIMARY_URL")
        routing_env.setenv("BUNDLER_PRIMARY_NAME", "other")

        config = ConfigManager()

        with pytest.raises(ConfigError):
            config.bundler

    def test_environment_override(self, routing_env):
        assert ConfigManager(environment="production").environment == "production"

    def test_invalid_environment_override(self, routing_env):
        with pytest.raises(ConfigError):
            ConfigManager(environment="qa")

    def test_reload_config_returns_new_instance(self, routing_env):
        first = reload_config()
        second = reload_config()

        assert first is not second
        assert "chains" in second.to_dict()


class TestCreateBundlerRouter:
    """Building the shared router from the environment."""

    def test_builds_primary_and_secondary(self, routing_env):
        routing_env.setenv("BUNDLER_SEND_TIMEOUT_MS", "3000")

        router = create_bundler_router()

        assert isinstance(router, BundlerRouter)
        assert isinstance(router.primary, HttpBundlerAdapter)
        assert router.primary.name == "pimlico"
        assert router.primary.rpc_url == "https://pimlico.example/rpc"
        assert router.primary.timeout_ms == 3000
        assert router.secondary.name == "alchemy"
        assert router.secondary.chain_id == 8453
        assert router.config.send_timeout_ms == 3000

    def test_primary_only(self, routing_env):
        routing_env.delenv("BUNDLER_SECONDARY_URL")

        router = create_bundler_router()

        assert router.secondary is None
