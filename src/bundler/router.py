"""
Primary/secondary bundler router.

Every operation is tried on the primary relay first, bounded by the
adapter's timeout. Only transient failures move on to the secondary, and
the secondary attempt starts strictly after the primary attempt has ended:
racing both relays could submit the same user operation twice.
"""

import asyncio
import logging
from typing import Any, List, Optional

from ..config.bundler import BundlerRouterConfig
from .base import BundlerAdapter
from .errors import BundlerError, ErrorHandler
from .types import (
    Attempt,
    GasEstimate,
    RoutedResult,
    SendResult,
    UserOperationLike,
    UserOperationReceipt,
)

logger = logging.getLogger(__name__)


class BundlerRouter:
    """
    Routes user operations through one mandatory primary and an optional
    secondary adapter.

    Built once at startup and shared by all callers; it keeps no per-request
    or per-wallet state and is never mutated after construction.
    """

    def __init__(
        self,
        primary: BundlerAdapter,
        secondary: Optional[BundlerAdapter] = None,
        config: Optional[BundlerRouterConfig] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        if primary is None:
            raise ValueError("BundlerRouter requires a primary adapter")
        self._primary = primary
        self._secondary = secondary
        self._config = config or BundlerRouterConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = error_handler or ErrorHandler(self.logger)

    @property
    def primary(self) -> BundlerAdapter:
        return self._primary

    @property
    def secondary(self) -> Optional[BundlerAdapter]:
        return self._secondary

    @property
    def config(self) -> BundlerRouterConfig:
        return self._config

    async def send(self, user_op: UserOperationLike) -> RoutedResult[SendResult]:
        """Submit a user operation (eth_sendUserOperation)."""
        return await self._route("send_user_operation", user_op)

    async def estimate_gas(self, user_op: UserOperationLike) -> RoutedResult[GasEstimate]:
        """Estimate gas for an unsent user operation (eth_estimateUserOperationGas)."""
        return await self._route("estimate_user_operation_gas", user_op)

    async def get_receipt(self, user_op_hash: str) -> RoutedResult[UserOperationReceipt]:
        """Fetch the receipt once; `value.included` is False while pending."""
        return await self._route("get_user_operation_receipt", user_op_hash)

    async def wait_for_receipt(self, user_op_hash: str) -> UserOperationReceipt:
        """
        Poll for a receipt until included or receipt_timeout_ms elapses.

        Transient polling failures are logged and polling continues;
        rejected ones are raised.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._config.receipt_timeout_ms / 1000

        while loop.time() < deadline:
            try:
                routed = await self.get_receipt(user_op_hash)
            except BundlerError as e:
                if not e.transient:
                    raise
                self.logger.warning(f"Receipt poll for {user_op_hash} failed: {e}")
            else:
                if routed.value.included:
                    return routed.value

            await asyncio.sleep(self._config.receipt_poll_ms / 1000)

        return UserOperationReceipt.pending(
            reason=f"receipt timeout after {self._config.receipt_timeout_ms}ms"
        )

    async def _attempt(self, adapter: BundlerAdapter, operation: str, *args: Any) -> Any:
        return await asyncio.wait_for(
            getattr(adapter, operation)(*args), timeout=adapter.timeout_ms / 1000
        )

    def _record_failure(
        self, attempts: List[Attempt], adapter: BundlerAdapter, operation: str, error: Exception
    ):
        attempts.append(Attempt(provider=adapter.name, ok=False, error=str(error) or type(error).__name__))
        self.error_handler.log_error(error, {"provider": adapter.name, "operation": operation})

    async def _route(self, operation: str, *args: Any) -> RoutedResult:
        attempts: List[Attempt] = []
        primary = self._primary

        try:
            value = await self._attempt(primary, operation, *args)
        except Exception as error:
            self._record_failure(attempts, primary, operation, error)
            if self._secondary is None or not self.error_handler.is_failover_worthy(error):
                raise self.error_handler.to_bundler_error(
                    error, provider=primary.name, attempts=attempts
                ) from error
            self.logger.warning(
                f"{operation} failed on {primary.name}, failing over to {self._secondary.name}: {error}"
            )
        else:
            attempts.append(Attempt(provider=primary.name, ok=True))
            return RoutedResult(provider=primary.name, value=value, attempts=attempts)

        secondary = self._secondary
        try:
            value = await self._attempt(secondary, operation, *args)
        except Exception as error:
            self._record_failure(attempts, secondary, operation, error)
            raise self.error_handler.to_bundler_error(
                error, provider=secondary.name, attempts=attempts
            ) from error

        attempts.append(Attempt(provider=secondary.name, ok=True))
        return RoutedResult(provider=secondary.name, value=value, attempts=attempts)

    async def aclose(self):
        """Close the adapters' network connections."""
        await self._primary.aclose()
        if self._secondary is not None:
            await self._secondary.aclose()
