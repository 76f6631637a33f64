"""
Core types for pool routing.

Domain models shared by pool discovery, quoting and route resolution.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..config.protocols import NATIVE_CURRENCY

MAX_FEE = 100_000
MAX_TICK_SPACING = 16_384


def validate_pool_params(fee: int, tick_spacing: int) -> bool:
    """Range check shared by PoolKey and the storage-slot heuristic."""
    return 0 < fee <= MAX_FEE and 0 < tick_spacing <= MAX_TICK_SPACING


@dataclass(frozen=True)
class PoolParams:
    """
    Per-hop pool configuration.

    Attributes:
        fee: Fee tier in hundredths of a bip
        tick_spacing: Tick spacing of the pool
        hooks: Hook contract address (zero address for no hook)
        hook_data: Opaque bytes passed to the hook
        source: "event" when read from the factory deployment event,
            "storage" when decoded heuristically from proxy storage
        ambiguous: True when the storage heuristic found more than one
            valid candidate slot
    """

    fee: int
    tick_spacing: int
    hooks: str = NATIVE_CURRENCY
    hook_data: bytes = b""
    source: str = "event"
    ambiguous: bool = False

    @property
    def has_hook(self) -> bool:
        return int(self.hooks, 16) != 0


@dataclass(frozen=True)
class PoolKey:
    """Uniswap V4 pool key with canonically ordered currencies."""

    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str = NATIVE_CURRENCY
    hook_data: bytes = b""

    def __post_init__(self):
        if self.currency0.lower() >= self.currency1.lower():
            raise ValueError(
                f"currency0 must sort below currency1: {self.currency0} >= {self.currency1}"
            )
        if not validate_pool_params(self.fee, self.tick_spacing):
            raise ValueError(
                f"Invalid pool params: fee={self.fee}, tick_spacing={self.tick_spacing}"
            )

    def as_abi_tuple(self) -> Tuple[str, str, int, int, str]:
        """(currency0, currency1, fee, tickSpacing, hooks) for ABI encoding."""
        return (self.currency0, self.currency1, self.fee, self.tick_spacing, self.hooks)


def make_pool_key(token_in: str, token_out: str, params: PoolParams) -> Tuple[PoolKey, bool]:
    """
    Build the canonical pool key for a directed hop.

    Pools are indexed by the sorted pair, so the lower address is always
    currency0 and the swap direction is reported separately.

    Returns:
        (pool_key, zero_for_one) where zero_for_one is True when token_in
        is currency0
    """
    if token_in.lower() < token_out.lower():
        currency0, currency1 = token_in, token_out
    else:
        currency0, currency1 = token_out, token_in

    pool_key = PoolKey(
        currency0=currency0,
        currency1=currency1,
        fee=params.fee,
        tick_spacing=params.tick_spacing,
        hooks=params.hooks,
        hook_data=params.hook_data,
    )
    return pool_key, token_in.lower() == currency0.lower()


@dataclass(frozen=True)
class SwapPath:
    """Ordered token path with one PoolParams per consecutive pair."""

    tokens: List[str]
    pool_params: List[PoolParams] = field(default_factory=list)

    def __post_init__(self):
        if len(self.tokens) < 1:
            raise ValueError("Swap path needs at least one token")
        if len(self.pool_params) != len(self.tokens) - 1:
            raise ValueError(
                f"Expected {len(self.tokens) - 1} pool params for "
                f"{len(self.tokens)} tokens, got {len(self.pool_params)}"
            )

    @property
    def hops(self) -> int:
        return len(self.pool_params)

    def hop(self, index: int) -> Tuple[str, str, PoolParams]:
        """(token_in, token_out, params) for hop `index`."""
        return self.tokens[index], self.tokens[index + 1], self.pool_params[index]

    def reversed(self) -> "SwapPath":
        return SwapPath(tokens=self.tokens[::-1], pool_params=self.pool_params[::-1])
