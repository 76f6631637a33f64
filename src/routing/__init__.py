"""
Pool discovery, quoting and route resolution for Uniswap V4 / Zora coins.
"""

from .clients import CallClient, ContractReader, LogReader, StorageReader, Web3ChainClient
from .coin_route import CoinRoute, CoinRouteResolver, quote_coin_to_native
from .errors import (
    ClientCapabilityError,
    PoolNotDiscoverable,
    QuoteError,
    RouteNotFound,
    RoutingError,
    UnsupportedChainError,
)
from .pool_discovery import PoolParamResolver, discover_pool_params
from .pool_types import PoolKey, PoolParams, SwapPath, make_pool_key
from .quoter import PriceQuoter, QuoteResult, apply_slippage

__all__ = [
    'CallClient',
    'ContractReader',
    'LogReader',
    'StorageReader',
    'Web3ChainClient',
    'CoinRoute',
    'CoinRouteResolver',
    'quote_coin_to_native',
    'ClientCapabilityError',
    'PoolNotDiscoverable',
    'QuoteError',
    'RouteNotFound',
    'RoutingError',
    'UnsupportedChainError',
    'PoolParamResolver',
    'discover_pool_params',
    'PoolKey',
    'PoolParams',
    'SwapPath',
    'make_pool_key',
    'PriceQuoter',
    'QuoteResult',
    'apply_slippage',
]
