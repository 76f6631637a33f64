"""
Uniswap V4 price quoter.

Multi-hop quotes are computed one hop at a time with quoteExactInputSingle.
The quoter's native quoteExactInput reverts (HookNotImplemented) as soon as
any hop goes through a Doppler-hooked pool, so every hop is an independent
eth_call and the output of hop i becomes the input of hop i + 1.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from ..config.protocols import V4_QUOTER_ADDRESSES
from .clients import CallClient
from .errors import ClientCapabilityError, QuoteError, UnsupportedChainError
from .pool_types import PoolKey, PoolParams, SwapPath, make_pool_key

logger = logging.getLogger(__name__)

QUOTE_EXACT_INPUT_SINGLE_SIGNATURE = (
    "quoteExactInputSingle(((address,address,uint24,int24,address),bool,uint128,bytes))"
)
QUOTE_EXACT_SINGLE_PARAMS_TYPE = "((address,address,uint24,int24,address),bool,uint128,bytes)"
QUOTE_EXACT_INPUT_SINGLE_SELECTOR = function_signature_to_4byte_selector(
    QUOTE_EXACT_INPUT_SINGLE_SIGNATURE
)

MAX_SLIPPAGE_BPS = 10_000


@dataclass(frozen=True)
class QuoteResult:
    """Single-hop quote. Never cached; recomputed on every request."""

    amount_out: int
    gas_estimate: int = 0


def encode_quote_exact_input_single(
    pool_key: PoolKey, zero_for_one: bool, amount_in: int
) -> bytes:
    """Calldata for V4Quoter.quoteExactInputSingle."""
    key = (
        to_checksum_address(pool_key.currency0),
        to_checksum_address(pool_key.currency1),
        pool_key.fee,
        pool_key.tick_spacing,
        to_checksum_address(pool_key.hooks),
    )
    params = (key, zero_for_one, amount_in, pool_key.hook_data)
    return QUOTE_EXACT_INPUT_SINGLE_SELECTOR + encode([QUOTE_EXACT_SINGLE_PARAMS_TYPE], [params])


def decode_quote_exact_input_single(data: bytes) -> QuoteResult:
    """Decode (amountOut, gasEstimate) returned by quoteExactInputSingle."""
    if not data:
        raise QuoteError("V4 Quoter returned empty response")
    amount_out, gas_estimate = decode(["uint256", "uint256"], data)
    return QuoteResult(amount_out=amount_out, gas_estimate=gas_estimate)


def apply_slippage(amount_out: int, slippage_bps: int) -> int:
    """Minimum acceptable output for a slippage tolerance in basis points."""
    if slippage_bps < 0 or slippage_bps > MAX_SLIPPAGE_BPS:
        raise ValueError("slippage_bps must be between 0 and 10000")
    return amount_out * (MAX_SLIPPAGE_BPS - slippage_bps) // MAX_SLIPPAGE_BPS


def get_quoter_address(chain_id: int, quoter_addresses: Optional[Mapping[int, str]] = None) -> str:
    addresses = quoter_addresses if quoter_addresses is not None else V4_QUOTER_ADDRESSES
    if chain_id not in addresses:
        raise UnsupportedChainError(f"No V4 Quoter address for chainId {chain_id}")
    return addresses[chain_id]


class PriceQuoter:
    """
    Read-only quoting against the chain's V4 Quoter.

    Holds no mutable state; concurrent callers can share one instance.
    """

    def __init__(
        self,
        client: CallClient,
        chain_id: int,
        quoter_addresses: Optional[Mapping[int, str]] = None,
    ):
        if not isinstance(client, CallClient):
            raise ClientCapabilityError(f"{type(client).__name__} does not implement eth_call")
        self.client = client
        self.chain_id = chain_id
        self.quoter_address = get_quoter_address(chain_id, quoter_addresses)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def quote_exact_input_single(
        self, pool_key: PoolKey, zero_for_one: bool, amount_in: int
    ) -> QuoteResult:
        """Quote a single exact-input swap through one pool."""
        calldata = encode_quote_exact_input_single(pool_key, zero_for_one, amount_in)
        data = await self.client.call(self.quoter_address, calldata)
        return decode_quote_exact_input_single(data)

    async def quote_multi_hop(
        self,
        path: Sequence[str],
        pool_params: Sequence[PoolParams],
        amount_in: int,
    ) -> int:
        """
        Quote an exact-input swap along `path`.

        Args:
            path: N token addresses
            pool_params: N - 1 per-hop pool params
            amount_in: Input amount of path[0]

        Returns:
            Expected output amount of path[-1]; amount_in unchanged for a
            single-token path

        Errors from any hop propagate unmodified, since a failed hop
        invalidates the running amount.
        """
        swap_path = SwapPath(tokens=list(path), pool_params=list(pool_params))

        current_amount = amount_in
        for index in range(swap_path.hops):
            token_in, token_out, params = swap_path.hop(index)
            pool_key, zero_for_one = make_pool_key(token_in, token_out, params)
            quote = await self.quote_exact_input_single(pool_key, zero_for_one, current_amount)
            self.logger.debug(
                f"Hop {index + 1}/{swap_path.hops} {token_in} -> {token_out}: "
                f"{current_amount} -> {quote.amount_out}"
            )
            current_amount = quote.amount_out

        return current_amount
