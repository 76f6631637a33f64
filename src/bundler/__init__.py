"""
ERC-4337 bundler access with primary/secondary failover.
"""

from .base import BundlerAdapter
from .errors import (
    BundlerError,
    ErrorCategory,
    ErrorHandler,
    JsonRpcError,
    classify_bundler_error,
    is_failover_worthy,
)
from .factory import create_bundler_router
from .http_adapter import HttpBundlerAdapter
from .router import BundlerRouter
from .types import (
    Attempt,
    GasEstimate,
    RoutedResult,
    SendResult,
    UserOperation,
    UserOperationReceipt,
)

__all__ = [
    'BundlerAdapter',
    'BundlerError',
    'ErrorCategory',
    'ErrorHandler',
    'JsonRpcError',
    'classify_bundler_error',
    'is_failover_worthy',
    'create_bundler_router',
    'HttpBundlerAdapter',
    'BundlerRouter',
    'Attempt',
    'GasEstimate',
    'RoutedResult',
    'SendResult',
    'UserOperation',
    'UserOperationReceipt',
]
