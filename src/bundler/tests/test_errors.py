"""
Tests for bundler error classification.
"""

import asyncio
import logging

import aiohttp
import pytest

from src.bundler.errors import (
    BundlerError,
    ErrorCategory,
    ErrorHandler,
    JsonRpcError,
    classify_bundler_error,
    is_failover_worthy,
)


class TestClassifyError:

    @pytest.mark.parametrize(
        "error,expected",
        [
            (asyncio.TimeoutError(), ErrorCategory.RETRYABLE),
            (aiohttp.ClientConnectionError("refused"), ErrorCategory.RETRYABLE),
            (JsonRpcError("eth_sendUserOperation", "upstream down", status=502), ErrorCategory.RETRYABLE),
            (Exception("429 Too Many Requests"), ErrorCategory.RATE_LIMIT),
            (Exception("rate limit exceeded"), ErrorCategory.RATE_LIMIT),
            (Exception("RPC eth_sendUserOperation timeout after 2000ms"), ErrorCategory.RETRYABLE),
            (Exception("socket hang up: ECONNRESET"), ErrorCategory.RETRYABLE),
            (Exception("replacement underpriced"), ErrorCategory.UNDERPRICED),
            (Exception("AA21 didn't pay prefund"), ErrorCategory.VALIDATION),
            (Exception("invalid UserOperation nonce"), ErrorCategory.VALIDATION),
            (Exception("paymaster deposit too low"), ErrorCategory.VALIDATION),
            (Exception("something unexpected"), ErrorCategory.FATAL),
            (Exception("AA25 invalid account nonce: expected 1503"), ErrorCategory.VALIDATION),
            (Exception("sender 0x5030000000000000000000000000000000000502 reverted"), ErrorCategory.FATAL),
            (Exception("504 Gateway Timeout"), ErrorCategory.RETRYABLE),
        ],
    )
    def test_categories(self, error, expected):
        assert classify_bundler_error(error) == expected

    def test_bundler_error_keeps_its_category(self):
        error = BundlerError("rate limited upstream", ErrorCategory.FATAL)

        assert classify_bundler_error(error) == ErrorCategory.FATAL

    def test_only_transient_categories_fail_over(self):
        assert is_failover_worthy(Exception("429"))
        assert is_failover_worthy(asyncio.TimeoutError())
        assert not is_failover_worthy(Exception("AA23 reverted"))
        assert not is_failover_worthy(Exception("something unexpected"))


class TestErrorHandler:

    def test_to_bundler_error_uses_type_name_for_empty_message(self):
        error = ErrorHandler().to_bundler_error(asyncio.TimeoutError(), provider="pimlico")

        assert error.message == "TimeoutError"
        assert error.provider == "pimlico"
        assert error.transient is True

    def test_rejections_are_logged_as_errors(self, caplog):
        handler = ErrorHandler(logging.getLogger("bundler-test"))

        with caplog.at_level(logging.INFO, logger="bundler-test"):
            handler.log_error(Exception("AA23 reverted"), {"provider": "pimlico"})
            handler.log_error(Exception("503 Service Unavailable"), {"provider": "pimlico"})

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.ERROR, logging.WARNING]
        assert caplog.records[0].provider == "pimlico"


class TestStructuredFields:
    """HTTP status and JSON-RPC code decide before message keywords"""

    @pytest.mark.parametrize("code", [-32502, -32503, -32504, -32500, -32602])
    def test_json_rpc_error_code_is_a_rejection(self, code):
        error = JsonRpcError(
            "eth_sendUserOperation", f"RPC eth_sendUserOperation failed ({code}): rejected", code=code
        )

        assert classify_bundler_error(error) == ErrorCategory.VALIDATION
        assert not is_failover_worthy(error)

    def test_coded_underpriced_keeps_its_category(self):
        error = JsonRpcError(
            "eth_sendUserOperation",
            "RPC eth_sendUserOperation failed (-32602): max fee per gas less than block base fee",
            code=-32602,
        )

        assert classify_bundler_error(error) == ErrorCategory.UNDERPRICED

    def test_coded_error_mentioning_timeout_is_still_rejected(self):
        error = JsonRpcError(
            "eth_sendUserOperation",
            "RPC eth_sendUserOperation failed (-32503): validUntil timeout window passed",
            code=-32503,
        )

        assert classify_bundler_error(error) == ErrorCategory.VALIDATION

    def test_http_429_status_is_rate_limit(self):
        error = JsonRpcError("eth_sendUserOperation", "RPC eth_sendUserOperation failed HTTP 429", status=429)

        assert classify_bundler_error(error) == ErrorCategory.RATE_LIMIT

    def test_malformed_response_is_transient(self):
        error = JsonRpcError(
            "eth_sendUserOperation",
            "RPC eth_sendUserOperation returned a malformed response: Expecting value: line 1 column 1 (char 0)",
        )

        assert classify_bundler_error(error) == ErrorCategory.RETRYABLE
