"""
Base interface for bundler adapters.
"""

from abc import ABC, abstractmethod

from .types import GasEstimate, SendResult, UserOperationLike, UserOperationReceipt


class BundlerAdapter(ABC):
    """
    One ERC-4337 relay endpoint.

    Attributes:
        name: Provider name used to tag routed results
        chain_id: Chain the relay serves
        entry_point: EntryPoint contract the relay submits to
        timeout_ms: Upper bound for a single call, enforced by the router
    """

    def __init__(self, name: str, chain_id: int, entry_point: str, timeout_ms: int):
        self.name = name
        self.chain_id = chain_id
        self.entry_point = entry_point
        self.timeout_ms = timeout_ms

    @abstractmethod
    async def send_user_operation(self, user_op: UserOperationLike) -> SendResult:
        pass

    @abstractmethod
    async def estimate_user_operation_gas(self, user_op: UserOperationLike) -> GasEstimate:
        pass

    @abstractmethod
    async def get_user_operation_receipt(self, user_op_hash: str) -> UserOperationReceipt:
        pass

    async def aclose(self):
        """Release network resources."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, chain_id={self.chain_id})"
