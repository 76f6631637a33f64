"""
In-memory chain clients for routing tests.
"""

from typing import Any, Dict, List, Optional, Sequence

from eth_abi import decode, encode

from src.routing.clients import CallClient, ContractReader, LogReader, StorageReader
from src.routing.pool_discovery import COIN_CREATED_V4_DATA_TYPES
from src.routing.quoter import QUOTE_EXACT_INPUT_SINGLE_SELECTOR, QUOTE_EXACT_SINGLE_PARAMS_TYPE
from src.config.protocols import COIN_CREATED_V4_EVENT

ZERO_WORD = bytes(32)


def pack_pool_slot(fee: int, tick_spacing: int, currency: str) -> bytes:
    """[8 bytes padding][tickSpacing:1][pad:1][fee:2][currency:20]"""
    return (
        bytes(8)
        + bytes([tick_spacing])
        + b"\x00"
        + fee.to_bytes(2, "big")
        + bytes.fromhex(currency[2:])
    )


def pack_hook_slot(hooks: str) -> bytes:
    return bytes(12) + bytes.fromhex(hooks[2:])


def make_coin_created_log(
    coin: str,
    fee: int,
    tick_spacing: int,
    hooks: str,
    currency: str = "0x1111111111111111111111111111111111111111",
) -> Dict[str, Any]:
    """Build a CoinCreatedV4 log as returned by eth_getLogs."""
    data = encode(
        COIN_CREATED_V4_DATA_TYPES,
        [
            currency,
            "https://example.com",
            "TestCoin",
            "TC",
            coin.lower(),
            (currency, coin.lower(), fee, tick_spacing, hooks),
            bytes(31) + b"\x01",
            "4",
        ],
    )
    return {
        "topics": [
            COIN_CREATED_V4_EVENT,
            "0x" + "aa" * 32,
            "0x" + "bb" * 32,
            "0x" + "cc" * 32,
        ],
        "data": data,
        "blockNumber": 1,
    }


class FakeLogClient(LogReader):
    """Client exposing only the mandatory log query capability."""

    def __init__(self, logs: Optional[List[Dict[str, Any]]] = None, log_error: Optional[Exception] = None):
        self.logs = logs or []
        self.log_error = log_error
        self.log_queries = []

    async def get_logs(self, address, event_topic, from_block=0, to_block="latest"):
        self.log_queries.append((address, event_topic, from_block, to_block))
        if self.log_error is not None:
            raise self.log_error
        return self.logs


class FakeChainClient(FakeLogClient, StorageReader, ContractReader):
    """Client with log, storage and contract-read capabilities."""

    def __init__(
        self,
        slots: Optional[Dict[int, bytes]] = None,
        currencies: Optional[Dict[str, str]] = None,
        logs: Optional[List[Dict[str, Any]]] = None,
        log_error: Optional[Exception] = None,
    ):
        super().__init__(logs=logs, log_error=log_error)
        self.slots = slots or {}
        self.currencies = {k.lower(): v for k, v in (currencies or {}).items()}
        self.storage_reads = []
        self.contract_reads = []

    async def get_storage_at(self, address: str, slot: int) -> bytes:
        self.storage_reads.append((address, slot))
        return self.slots.get(slot, ZERO_WORD)

    async def read_contract(self, address: str, function_signature: str, output_types: Sequence[str]):
        self.contract_reads.append((address, function_signature))
        currency = self.currencies.get(address.lower())
        if currency is None:
            raise ValueError("execution reverted")
        return (currency,)


class FakeQuoterClient(CallClient):
    """
    eth_call fake for the V4 Quoter.

    Multiplies the input amount by a per-fee rate and records every decoded call.
    """

    def __init__(self, rates: Dict[int, int], fail_on_call: Optional[int] = None, empty: bool = False):
        self.rates = rates
        self.fail_on_call = fail_on_call
        self.empty = empty
        self.calls = []

    async def call(self, to: str, data: bytes) -> bytes:
        assert data[:4] == QUOTE_EXACT_INPUT_SINGLE_SELECTOR
        (params,) = decode([QUOTE_EXACT_SINGLE_PARAMS_TYPE], data[4:])
        pool_key, zero_for_one, amount_in, hook_data = params
        self.calls.append(
            {
                "to": to,
                "pool_key": pool_key,
                "zero_for_one": zero_for_one,
                "amount_in": amount_in,
                "hook_data": hook_data,
            }
        )
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError("execution reverted: HookNotImplemented")
        if self.empty:
            return b""
        return encode(["uint256", "uint256"], [amount_in * self.rates[pool_key[2]], 21_000])
