"""
Minimal JSON-RPC 2.0 transport over aiohttp.
"""

import asyncio
import itertools
from typing import Any, List

import aiohttp

from .errors import JsonRpcError

_request_ids = itertools.count(1)


async def rpc_call(
    session: aiohttp.ClientSession,
    url: str,
    method: str,
    params: List[Any],
    timeout_ms: int,
) -> Any:
    """
    POST a JSON-RPC request and return its `result`.

    Raises:
        JsonRpcError: On non-2xx HTTP status, a JSON-RPC error object, a malformed
            response body, or timeout
    """
    body = {
        "jsonrpc": "2.0",
        "id": next(_request_ids),
        "method": method,
        "params": params,
    }

    try:
        async with session.post(
            url, json=body, timeout=aiohttp.ClientTimeout(total=timeout_ms / 1000)
        ) as response:
            if not 200 <= response.status < 300:
                raise JsonRpcError(
                    method, f"RPC {method} failed HTTP {response.status}", status=response.status
                )
            try:
                payload = await response.json(content_type=None)
            except ValueError as e:
                raise JsonRpcError(method, f"RPC {method} returned a malformed response: {e}") from e
    except asyncio.TimeoutError as e:
        raise JsonRpcError(method, f"RPC {method} timeout after {timeout_ms}ms") from e

    if not isinstance(payload, dict):
        raise JsonRpcError(
            method, f"RPC {method} returned a malformed response: {type(payload).__name__}"
        )

    error = payload.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise JsonRpcError(method, f"RPC {method} returned a malformed response: {error!r}")
        code = error.get("code")
        message = error.get("message") or "Unknown JSON-RPC error"
        raise JsonRpcError(method, f"RPC {method} failed ({code}): {message}", code=code)

    return payload.get("result")
