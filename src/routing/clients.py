"""
Chain client capability interfaces.

Pool discovery needs log queries (mandatory) and, for its heuristic
fallback, raw storage reads plus read-only contract calls (optional).
Quoting needs eth_call. Each capability is a separate ABC so consumers can
check what a client supports once, at construction time.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Sequence, Tuple, Union

from eth_abi import decode
from eth_utils import function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3 import Web3

logger = logging.getLogger(__name__)

BlockIdentifier = Union[int, str]


class LogReader(ABC):
    """Event log queries."""

    @abstractmethod
    async def get_logs(
        self,
        address: str,
        event_topic: str,
        from_block: BlockIdentifier = 0,
        to_block: BlockIdentifier = "latest",
    ) -> List[Dict[str, Any]]:
        """
        Fetch logs emitted by `address` whose first topic is `event_topic`.

        Returns:
            Log dicts with at least "topics" and "data"
        """
        pass


class StorageReader(ABC):
    """Raw contract storage reads."""

    @abstractmethod
    async def get_storage_at(self, address: str, slot: int) -> bytes:
        """Return the 32-byte storage word at `slot`."""
        pass


class ContractReader(ABC):
    """Read-only contract calls with decoded results."""

    @abstractmethod
    async def read_contract(
        self, address: str, function_signature: str, output_types: Sequence[str]
    ) -> Tuple[Any, ...]:
        """Call an argument-less view function, e.g. "currency()"."""
        pass


class CallClient(ABC):
    """Raw eth_call."""

    @abstractmethod
    async def call(self, to: str, data: bytes) -> bytes:
        """Execute eth_call and return the raw returned bytes."""
        pass


class Web3ChainClient(LogReader, StorageReader, ContractReader, CallClient):
    """
    All chain capabilities backed by a web3.py HTTP provider.

    The provider is synchronous, so every request runs in the loop's default
    executor and concurrent callers do not block each other.
    """

    def __init__(self, web3: Web3):
        self.web3 = web3
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_rpc_url(cls, rpc_url: str) -> "Web3ChainClient":
        return cls(Web3(Web3.HTTPProvider(rpc_url)))

    async def _run_blocking(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def get_logs(
        self,
        address: str,
        event_topic: str,
        from_block: BlockIdentifier = 0,
        to_block: BlockIdentifier = "latest",
    ) -> List[Dict[str, Any]]:
        logs = await self._run_blocking(
            self.web3.eth.get_logs,
            {
                "address": Web3.to_checksum_address(address),
                "topics": [event_topic],
                "fromBlock": from_block,
                "toBlock": to_block,
            },
        )
        self.logger.debug(f"Fetched {len(logs)} logs for {address}")
        return [dict(log) for log in logs]

    async def get_storage_at(self, address: str, slot: int) -> bytes:
        value = await self._run_blocking(
            self.web3.eth.get_storage_at, Web3.to_checksum_address(address), slot
        )
        return bytes(HexBytes(value)).rjust(32, b"\x00")

    async def read_contract(
        self, address: str, function_signature: str, output_types: Sequence[str]
    ) -> Tuple[Any, ...]:
        selector = function_signature_to_4byte_selector(function_signature)
        raw = await self.call(address, selector)
        return tuple(decode(list(output_types), raw))

    async def call(self, to: str, data: bytes) -> bytes:
        result = await self._run_blocking(
            self.web3.eth.call,
            {"to": Web3.to_checksum_address(to), "data": HexBytes(data).to_0x_hex()},
        )
        return bytes(result)
