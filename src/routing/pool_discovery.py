"""
Pool parameter discovery for Zora coins.

Resolves the (fee, tick spacing, hooks) needed to quote or swap a coin on
Uniswap V4. Two strategies are tried in order:

1. Authoritative: the CoinCreatedV4 event emitted by the chain's ZoraFactory
   carries the full pool key.
2. Heuristic: Zora coins are EIP-1167 minimal proxies whose storage packs the
   pool configuration next to the paired currency:

       [8 bytes padding][tickSpacing:1][pad:1][fee:2][currency:20]

   followed within two slots by the hook address. The only validation
   available is the fee / tick spacing range check, so matches from this path
   are tagged source="storage" and never treated as authoritative.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from ..config.protocols import COIN_CREATED_V4_EVENT, NATIVE_CURRENCY, ZORA_FACTORY_ADDRESSES
from .clients import ContractReader, LogReader, StorageReader
from .errors import ClientCapabilityError, PoolNotDiscoverable
from .pool_types import PoolParams, validate_pool_params

logger = logging.getLogger(__name__)

# Non-indexed CoinCreatedV4 fields:
# currency, uri, name, symbol, coin, poolKey, poolKeyHash, version
COIN_CREATED_V4_DATA_TYPES = [
    "address",
    "string",
    "string",
    "string",
    "address",
    "(address,address,uint24,int24,address)",
    "bytes32",
    "string",
]

STORAGE_SCAN_SLOTS = 15
HOOK_SLOT_LOOKAHEAD = 2


def decode_pool_slot(word: bytes) -> Tuple[str, int, int]:
    """
    Split a packed pool-config storage word.

    Args:
        word: 32-byte storage value

    Returns:
        (currency, fee, tick_spacing) with currency as lowercase hex
    """
    word = bytes(word).rjust(32, b"\x00")[-32:]
    tick_spacing = word[8]
    fee = int.from_bytes(word[10:12], byteorder="big")
    currency = "0x" + word[12:].hex()
    return currency, fee, tick_spacing


def decode_address_word(word: bytes) -> Optional[str]:
    """Low 20 bytes of a storage word as an address, or None if zero."""
    address_bytes = bytes(word)[-20:]
    if not any(address_bytes):
        return None
    return to_checksum_address("0x" + address_bytes.hex())


class PoolParamResolver:
    """
    Resolve V4 pool params for a token, event first and storage second.

    The client's capabilities are checked once here: log queries are
    mandatory, the storage fallback is only enabled when the client can both
    read storage and call view functions.
    """

    def __init__(
        self,
        client: LogReader,
        factory_addresses: Optional[Mapping[int, str]] = None,
    ):
        if not isinstance(client, LogReader):
            raise ClientCapabilityError(
                f"{type(client).__name__} does not implement log queries"
            )
        self.client = client
        self.factory_addresses = dict(
            factory_addresses if factory_addresses is not None else ZORA_FACTORY_ADDRESSES
        )
        self.storage_fallback_enabled = isinstance(client, StorageReader) and isinstance(
            client, ContractReader
        )
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def resolve(self, chain_id: int, token: str) -> PoolParams:
        """
        Discover the pool params for `token` on `chain_id`.

        Raises:
            PoolNotDiscoverable: If no strategy produced a valid result
        """
        params = await self._from_creation_event(chain_id, token)
        if params is not None:
            return params

        if not self.storage_fallback_enabled:
            raise PoolNotDiscoverable(
                token, chain_id, "no CoinCreatedV4 event and client cannot read storage"
            )

        params = await self._from_proxy_storage(token)
        if params is not None:
            return params

        raise PoolNotDiscoverable(
            token, chain_id, "no CoinCreatedV4 event and no valid storage layout"
        )

    async def _from_creation_event(self, chain_id: int, token: str) -> Optional[PoolParams]:
        factory = self.factory_addresses.get(chain_id)
        if factory is None:
            self.logger.warning(f"No ZoraFactory address for chainId {chain_id}, skipping event scan")
            return None

        try:
            logs = await self.client.get_logs(factory, COIN_CREATED_V4_EVENT, 0, "latest")
        except Exception as e:
            self.logger.warning(f"CoinCreatedV4 log query failed for {token}: {e}")
            return None

        target = token.lower()
        for log in logs:
            decoded = self._decode_coin_created(log)
            if decoded is None:
                continue

            coin, pool_key = decoded
            if coin.lower() != target:
                continue

            _, _, fee, tick_spacing, hooks = pool_key
            self.logger.debug(f"Found CoinCreatedV4 for {token}: fee={fee}, tickSpacing={tick_spacing}")
            return PoolParams(
                fee=fee,
                tick_spacing=tick_spacing,
                hooks=to_checksum_address(hooks),
                source="event",
            )

        self.logger.info(f"No CoinCreatedV4 event for {token} among {len(logs)} logs")
        return None

    def _decode_coin_created(self, log: Dict[str, Any]) -> Optional[Tuple[str, tuple]]:
        try:
            fields = decode(COIN_CREATED_V4_DATA_TYPES, bytes(HexBytes(log["data"])))
        except (DecodingError, KeyError, ValueError) as e:
            self.logger.debug(f"Skipping undecodable CoinCreatedV4 log: {e}")
            return None
        return fields[4], fields[5]

    async def _from_proxy_storage(self, token: str) -> Optional[PoolParams]:
        try:
            (currency,) = await self.client.read_contract(token, "currency()", ["address"])
        except Exception as e:
            self.logger.warning(f"currency() call failed for {token}: {e}")
            return None

        currency = currency.lower()
        words = [
            await self.client.get_storage_at(token, slot) for slot in range(STORAGE_SCAN_SLOTS)
        ]

        candidates = self._scan_pool_slots(words, currency)
        if not candidates:
            return None

        slot, fee, tick_spacing, hooks = candidates[0]
        ambiguous = len(candidates) > 1
        if ambiguous:
            self.logger.warning(
                f"Ambiguous storage layout for {token}: {len(candidates)} candidate slots "
                f"({[c[0] for c in candidates]}), using slot {slot}"
            )
        else:
            self.logger.warning(
                f"Heuristic pool params for {token} from slot {slot}: "
                f"fee={fee}, tickSpacing={tick_spacing}, hooks={hooks}"
            )

        return PoolParams(
            fee=fee,
            tick_spacing=tick_spacing,
            hooks=hooks,
            source="storage",
            ambiguous=ambiguous,
        )

    def _scan_pool_slots(
        self, words: List[bytes], currency: str
    ) -> List[Tuple[int, int, int, str]]:
        candidates = []
        for index, word in enumerate(words):
            if not any(word):
                continue

            slot_currency, fee, tick_spacing = decode_pool_slot(word)
            if slot_currency != currency:
                continue

            # Rejects false-positive byte patterns next to the currency
            if not validate_pool_params(fee, tick_spacing):
                self.logger.debug(
                    f"Slot {index} matches currency but fee={fee}, tickSpacing={tick_spacing} out of range"
                )
                continue

            candidates.append((index, fee, tick_spacing, self._find_hook(words, index)))
        return candidates

    @staticmethod
    def _find_hook(words: List[bytes], pool_slot: int) -> str:
        end = min(pool_slot + 1 + HOOK_SLOT_LOOKAHEAD, len(words))
        for index in range(pool_slot + 1, end):
            hook = decode_address_word(words[index])
            if hook is not None:
                return hook
        return NATIVE_CURRENCY


async def discover_pool_params(client: LogReader, chain_id: int, token: str) -> PoolParams:
    """Resolve pool params with a one-off resolver."""
    return await PoolParamResolver(client).resolve(chain_id, token)
