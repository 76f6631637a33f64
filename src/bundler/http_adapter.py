"""
HTTP JSON-RPC bundler adapter.
"""

import logging
from typing import Any, List, Optional

import aiohttp

from .base import BundlerAdapter
from .json_rpc import rpc_call
from .types import (
    GasEstimate,
    SendResult,
    UserOperationLike,
    UserOperationReceipt,
    user_operation_payload,
)

logger = logging.getLogger(__name__)


class HttpBundlerAdapter(BundlerAdapter):
    """Bundler reached through standard eth_*UserOperation JSON-RPC methods."""

    def __init__(
        self,
        name: str,
        rpc_url: str,
        chain_id: int,
        entry_point: str,
        timeout_ms: int,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(name, chain_id, entry_point, timeout_ms)
        self.rpc_url = rpc_url
        self._session = session
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        return await rpc_call(self._get_session(), self.rpc_url, method, params, self.timeout_ms)

    async def estimate_user_operation_gas(self, user_op: UserOperationLike) -> GasEstimate:
        raw = await self._rpc(
            "eth_estimateUserOperationGas", [user_operation_payload(user_op), self.entry_point]
        )
        return GasEstimate.from_rpc(raw)

    async def send_user_operation(self, user_op: UserOperationLike) -> SendResult:
        user_op_hash = await self._rpc(
            "eth_sendUserOperation", [user_operation_payload(user_op), self.entry_point]
        )
        self.logger.info(f"{self.name} accepted user operation {user_op_hash}")
        return SendResult(provider=self.name, user_op_hash=user_op_hash)

    async def get_user_operation_receipt(self, user_op_hash: str) -> UserOperationReceipt:
        raw = await self._rpc("eth_getUserOperationReceipt", [user_op_hash])
        return UserOperationReceipt.from_rpc(raw)

    async def aclose(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
