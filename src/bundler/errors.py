"""
Error classification for bundler operations.

Every failure is mapped to a category. Transient categories (rate limits,
timeouts, connection failures, 5xx responses) are worth retrying against
another relay; the rest mean the user operation itself is invalid and
would fail on any relay.

Transport errors are classified by their HTTP status and JSON-RPC code
first. Message keywords only decide for errors without those fields.
"""

import asyncio
import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    RATE_LIMIT = "rate_limit"
    RETRYABLE = "retryable"
    UNDERPRICED = "underpriced"
    VALIDATION = "validation"
    FATAL = "fatal"

    @property
    def is_transient(self) -> bool:
        return self in (ErrorCategory.RATE_LIMIT, ErrorCategory.RETRYABLE)


class BundlerError(Exception):
    """
    Classified bundler failure surfaced to callers.

    Attributes:
        category: ErrorCategory of the last failure
        provider: Name of the adapter that produced the last failure
        attempts: Every adapter attempt made for the request, in order
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        provider: Optional[str] = None,
        attempts: Optional[List[Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.provider = provider
        self.attempts = list(attempts or [])

    @property
    def transient(self) -> bool:
        return self.category.is_transient


class JsonRpcError(Exception):
    """Raised by the JSON-RPC transport for HTTP, protocol and timeout failures."""

    def __init__(
        self,
        method: str,
        message: str,
        code: Optional[int] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.method = method
        self.code = code
        self.status = status


RATE_LIMIT_KEYWORDS = [r"\b429\b", "rate limit", "too many requests"]
RETRYABLE_KEYWORDS = [
    "timeout",
    "timed out",
    "econnreset",
    "ehostunreach",
    "connection",
    r"\b50[234]\b",
    "network",
    "malformed response",
]
UNDERPRICED_KEYWORDS = ["underpriced", "fee too low", "max fee per gas less than block base fee"]
VALIDATION_KEYWORDS = [
    r"\baa\d\d\b",
    "simulatevalidation",
    "validation",
    "invalid signature",
    "insufficient prefund",
    "insufficient balance",
    "nonce",
    "paymaster",
    "invalid",
]


def _has_any(text: str, keywords: List[str]) -> bool:
    return any(re.search(keyword, text) for keyword in keywords)


class ErrorHandler:
    """
    Centralized error handling for bundler operations.

    Provides classification and logging for failures encountered while
    talking to relays.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: BaseException) -> ErrorCategory:
        """
        Classify an error into a category for failover decisions.

        Args:
            error: Exception to classify

        Returns:
            ErrorCategory
        """
        if isinstance(error, BundlerError):
            return error.category

        if isinstance(error, (asyncio.TimeoutError, aiohttp.ClientConnectionError)):
            return ErrorCategory.RETRYABLE

        if isinstance(error, JsonRpcError):
            if error.status == 429:
                return ErrorCategory.RATE_LIMIT
            if error.status is not None and error.status >= 500:
                return ErrorCategory.RETRYABLE
            if error.code is not None:
                # The relay answered with a JSON-RPC error object: it rejected the operation
                if _has_any(str(error).lower(), UNDERPRICED_KEYWORDS):
                    return ErrorCategory.UNDERPRICED
                return ErrorCategory.VALIDATION

        error_str = str(error).lower()

        if _has_any(error_str, RATE_LIMIT_KEYWORDS):
            return ErrorCategory.RATE_LIMIT

        if _has_any(error_str, RETRYABLE_KEYWORDS):
            return ErrorCategory.RETRYABLE

        if _has_any(error_str, UNDERPRICED_KEYWORDS):
            return ErrorCategory.UNDERPRICED

        if _has_any(error_str, VALIDATION_KEYWORDS):
            return ErrorCategory.VALIDATION

        return ErrorCategory.FATAL

    def is_failover_worthy(self, error: BaseException) -> bool:
        """Only transient failures justify retrying on another relay."""
        return self.classify_error(error).is_transient

    def to_bundler_error(
        self,
        error: BaseException,
        provider: Optional[str] = None,
        attempts: Optional[List[Any]] = None,
    ) -> BundlerError:
        """Wrap any failure as a classified BundlerError."""
        category = self.classify_error(error)
        message = str(error) or type(error).__name__
        return BundlerError(message, category, provider=provider, attempts=attempts)

    def log_error(self, error: BaseException, context: Dict[str, Any]):
        """
        Log error with appropriate level and context.

        Args:
            error: Exception to log
            context: Additional context for logging
        """
        error_category = self.classify_error(error)

        log_data = {
            'error_type': type(error).__name__,
            'error_category': error_category.value,
            'error_message': str(error),
            **context
        }

        if error_category == ErrorCategory.RATE_LIMIT:
            self.logger.info("Bundler rate limit encountered", extra=log_data)
        elif error_category.is_transient:
            self.logger.warning("Transient bundler error", extra=log_data)
        else:
            self.logger.error("Bundler rejected user operation", extra=log_data)


_default_handler = ErrorHandler(logger)


def classify_bundler_error(error: BaseException) -> ErrorCategory:
    return _default_handler.classify_error(error)


def is_failover_worthy(error: BaseException) -> bool:
    return _default_handler.is_failover_worthy(error)
