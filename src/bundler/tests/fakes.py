"""
In-memory bundler adapters for router tests.
"""

import asyncio
from typing import List, Optional

from src.bundler.base import BundlerAdapter
from src.bundler.types import GasEstimate, SendResult, UserOperationReceipt

ENTRY_POINT = "0x5FF137D4b0FDCD49DcA30c7CF57E578a026d2789"


class FakeAdapter(BundlerAdapter):
    """
    Adapter whose behaviour is scripted per test.

    Every call appends "<name>:start" / "<name>:end" to the shared `events`
    list so tests can assert on ordering across adapters.
    """

    def __init__(
        self,
        name: str,
        error: Optional[Exception] = None,
        delay: float = 0,
        receipts: Optional[List[UserOperationReceipt]] = None,
        timeout_ms: int = 500,
        events: Optional[List[str]] = None,
    ):
        super().__init__(name, 8453, ENTRY_POINT, timeout_ms)
        self.error = error
        self.delay = delay
        self.receipts = list(receipts or [])
        self.events = events if events is not None else []
        self.calls = []
        self.closed = False

    async def _run(self, operation: str, argument):
        self.calls.append((operation, argument))
        self.events.append(f"{self.name}:start")
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
        finally:
            self.events.append(f"{self.name}:end")

    async def send_user_operation(self, user_op):
        await self._run("send", user_op)
        return SendResult(provider=self.name, user_op_hash="0x" + "ab" * 32)

    async def estimate_user_operation_gas(self, user_op):
        await self._run("estimate", user_op)
        return GasEstimate(pre_verification_gas=50_000, verification_gas_limit=100_000, call_gas_limit=200_000)

    async def get_user_operation_receipt(self, user_op_hash):
        await self._run("receipt", user_op_hash)
        if self.receipts:
            return self.receipts.pop(0)
        return UserOperationReceipt.pending()

    async def aclose(self):
        self.closed = True

    @property
    def send_count(self) -> int:
        return sum(1 for operation, _ in self.calls if operation == "send")
