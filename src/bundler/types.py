"""
ERC-4337 user operation types exchanged with bundlers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


def _to_hex(value: Union[int, str, bytes]) -> str:
    if isinstance(value, int):
        return hex(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return value


@dataclass(frozen=True)
class UserOperation:
    """
    Account-abstraction execution request.

    The routing core treats it as opaque: it is serialized for the relay and
    otherwise only passed through. Fields not modelled here (paymaster data,
    factory data, ...) go in `extra` using their RPC names.
    """

    sender: str
    nonce: int
    call_data: Union[bytes, str]
    call_gas_limit: int = 0
    verification_gas_limit: int = 0
    pre_verification_gas: int = 0
    max_fee_per_gas: int = 0
    max_priority_fee_per_gas: int = 0
    signature: Union[bytes, str] = b""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_rpc(self) -> Dict[str, Any]:
        """camelCase hex-encoded form used by eth_sendUserOperation."""
        payload = {
            "sender": self.sender,
            "nonce": _to_hex(self.nonce),
            "callData": _to_hex(self.call_data),
            "callGasLimit": _to_hex(self.call_gas_limit),
            "verificationGasLimit": _to_hex(self.verification_gas_limit),
            "preVerificationGas": _to_hex(self.pre_verification_gas),
            "maxFeePerGas": _to_hex(self.max_fee_per_gas),
            "maxPriorityFeePerGas": _to_hex(self.max_priority_fee_per_gas),
            "signature": _to_hex(self.signature),
        }
        payload.update(self.extra)
        return payload


UserOperationLike = Union[UserOperation, Dict[str, Any]]


def user_operation_payload(user_op: UserOperationLike) -> Dict[str, Any]:
    if isinstance(user_op, UserOperation):
        return user_op.to_rpc()
    return dict(user_op)


@dataclass(frozen=True)
class GasEstimate:
    pre_verification_gas: int
    verification_gas_limit: int
    call_gas_limit: int

    @classmethod
    def from_rpc(cls, raw: Dict[str, Any]) -> "GasEstimate":
        return cls(
            pre_verification_gas=int(raw["preVerificationGas"], 16),
            verification_gas_limit=int(raw["verificationGasLimit"], 16),
            call_gas_limit=int(raw["callGasLimit"], 16),
        )


@dataclass(frozen=True)
class SendResult:
    provider: str
    user_op_hash: str


@dataclass(frozen=True)
class UserOperationReceipt:
    """Receipt-or-pending for a submitted user operation."""

    included: bool
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None
    success: Optional[bool] = None
    actual_gas_cost: Optional[int] = None
    actual_gas_used: Optional[int] = None
    reason: Optional[str] = None
    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def pending(cls, reason: Optional[str] = None) -> "UserOperationReceipt":
        return cls(included=False, reason=reason)

    @classmethod
    def from_rpc(cls, raw: Optional[Dict[str, Any]]) -> "UserOperationReceipt":
        if not raw:
            return cls.pending()

        receipt = raw.get("receipt") or {}
        block_number = receipt.get("blockNumber")
        gas_cost = raw.get("actualGasCost")
        gas_used = raw.get("actualGasUsed")
        return cls(
            included=True,
            tx_hash=receipt.get("transactionHash"),
            block_number=int(block_number, 16) if block_number else None,
            success=raw.get("success"),
            actual_gas_cost=int(gas_cost, 16) if gas_cost else None,
            actual_gas_used=int(gas_used, 16) if gas_used else None,
            raw=raw,
        )


@dataclass(frozen=True)
class Attempt:
    provider: str
    ok: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class RoutedResult(Generic[T]):
    """Result of a routed operation tagged with the adapter that served it."""

    provider: str
    value: T
    attempts: List[Attempt] = field(default_factory=list)

    @property
    def failed_over(self) -> bool:
        return len(self.attempts) > 1
