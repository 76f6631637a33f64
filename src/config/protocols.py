"""
Protocol-specific configuration for the fleet trade core.
"""

from typing import Dict

from eth_utils import keccak

NATIVE_CURRENCY = "0x0000000000000000000000000000000000000000"
ZORA_TOKEN_ADDRESS = "0x1111111111166b7FE7bd91427724B487980aFc69"

# ZoraFactory deployments (Base mainnet vs Base Sepolia differ)
ZORA_FACTORY_ADDRESSES: Dict[int, str] = {
    8453: "0x777777751622c0d3258f214F9DF38E35BF45baF3",
    84532: "0xaF88840cb637F2684A9E460316b1678AD6245e4a",
}

V4_QUOTER_ADDRESSES: Dict[int, str] = {
    8453: "0x0d5e0f971ed27fbff6c2837bf31316121532048d",
    84532: "0x4a6513c898fe1b2d0e78d3b0e0a4a151589b1cba",
}

COIN_CREATED_V4_SIGNATURE = (
    "CoinCreatedV4(address,address,address,address,string,string,string,address,"
    "(address,address,uint24,int24,address),bytes32,string)"
)
COIN_CREATED_V4_EVENT = "0x" + keccak(text=COIN_CREATED_V4_SIGNATURE).hex()

# ETH(native) / ZORA standard V4 pool
ETH_ZORA_HOP = {
    "fee": 3000,
    "tick_spacing": 60,
    "hooks": NATIVE_CURRENCY,
}

