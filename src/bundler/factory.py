"""
Composition root for the bundler router.
"""

import logging
from typing import Optional

from ..config.bundler import BundlerConfig
from .http_adapter import HttpBundlerAdapter
from .router import BundlerRouter

logger = logging.getLogger(__name__)


def create_bundler_router(config: Optional[BundlerConfig] = None) -> BundlerRouter:
    """
    Build the process-wide router from environment configuration.

    Call once at startup and pass the instance to every caller; close it with
    `await router.aclose()` on shutdown.
    """
    config = config or BundlerConfig()
    chain_id = config.chain_id
    router_config = config.router

    primary_cfg = config.primary
    primary = HttpBundlerAdapter(
        name=primary_cfg.name,
        rpc_url=primary_cfg.rpc_url,
        chain_id=chain_id,
        entry_point=primary_cfg.entry_point,
        timeout_ms=router_config.send_timeout_ms,
    )

    secondary = None
    secondary_cfg = config.secondary
    if secondary_cfg is not None:
        secondary = HttpBundlerAdapter(
            name=secondary_cfg.name,
            rpc_url=secondary_cfg.rpc_url,
            chain_id=chain_id,
            entry_point=secondary_cfg.entry_point,
            timeout_ms=router_config.send_timeout_ms,
        )

    logger.info(
        f"Bundler router on chain {chain_id}: primary={primary.name}, "
        f"secondary={secondary.name if secondary else 'none'}"
    )
    return BundlerRouter(primary, secondary, router_config)
