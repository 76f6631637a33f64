"""
Zora coin route resolution.

Discovers the full swap path for a Zora coin by:
1. Walking the coin ancestry via currency() calls (coin -> parent -> ... -> ZORA)
2. Resolving pool params for each coin (event first, storage second)
3. Prepending the standard ETH/ZORA V4 hop
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config.protocols import ETH_ZORA_HOP, NATIVE_CURRENCY, ZORA_TOKEN_ADDRESS
from .clients import ContractReader
from .errors import ClientCapabilityError, RouteNotFound
from .pool_discovery import PoolParamResolver
from .pool_types import PoolParams, SwapPath
from .quoter import PriceQuoter

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5


@dataclass(frozen=True)
class CoinRoute:
    """
    Buy and sell routes for a coin.

    Attributes:
        buy_path: [ETH(native), ZORA, ...parents, coin]
        sell_path: exact reverse of buy_path
        ancestry: [coin, parent, ..., ZORA]
    """

    buy_path: SwapPath
    sell_path: SwapPath
    ancestry: List[str]


class CoinRouteResolver:
    """Resolve buy/sell routes for Zora coins on one chain."""

    def __init__(
        self,
        client: ContractReader,
        chain_id: int,
        pool_resolver: Optional[PoolParamResolver] = None,
        anchor_token: str = ZORA_TOKEN_ADDRESS,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if not isinstance(client, ContractReader):
            raise ClientCapabilityError(
                f"{type(client).__name__} does not implement contract reads"
            )
        self.client = client
        self.chain_id = chain_id
        self.pool_resolver = pool_resolver or PoolParamResolver(client)
        self.anchor_token = anchor_token
        self.max_depth = max_depth
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _is_anchor(self, token: str) -> bool:
        return token.lower() == self.anchor_token.lower()

    async def resolve(self, coin: str) -> CoinRoute:
        """
        Resolve the complete route for `coin`.

        Raises:
            RouteNotFound: If the ancestry does not reach the anchor within max_depth
            PoolNotDiscoverable: If a coin along the ancestry has no discoverable pool
        """
        ancestry = [coin]
        hop_params: List[PoolParams] = []

        current = coin
        for _ in range(self.max_depth):
            if self._is_anchor(current):
                break

            try:
                (parent,) = await self.client.read_contract(current, "currency()", ["address"])
            except Exception as e:
                self.logger.debug(f"{current} has no currency(), stopping ancestry walk: {e}")
                break

            hop_params.append(await self.pool_resolver.resolve(self.chain_id, current))
            ancestry.append(parent)
            current = parent

        if not self._is_anchor(ancestry[-1]):
            raise RouteNotFound(
                f"Coin ancestry did not reach anchor {self.anchor_token}. "
                f"Ancestry: {' -> '.join(ancestry)}"
            )

        eth_anchor_hop = PoolParams(**ETH_ZORA_HOP)
        buy_path = SwapPath(
            tokens=[NATIVE_CURRENCY] + ancestry[::-1],
            pool_params=[eth_anchor_hop] + hop_params[::-1],
        )
        self.logger.info(f"Resolved {buy_path.hops}-hop route for {coin}")
        return CoinRoute(buy_path=buy_path, sell_path=buy_path.reversed(), ancestry=ancestry)


async def quote_coin_to_native(
    route_resolver: CoinRouteResolver, quoter: PriceQuoter, coin: str, amount: int
) -> int:
    """Expected native ETH out for selling `amount` of `coin` along its sell route."""
    route = await route_resolver.resolve(coin)
    return await quoter.quote_multi_hop(
        route.sell_path.tokens, route.sell_path.pool_params, amount
    )
