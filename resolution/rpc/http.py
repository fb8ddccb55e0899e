from __future__ import annotations

"""
Async HTTP JSON-RPC client for Ethereum-compatible nodes.

- Uses httpx.AsyncClient; one client is shared by every contract of a service.
- No retries, caching or batching: timeouts come from the httpx client and
  everything else is left to the caller or a proxy in front of the node.

Example:
    from resolution.rpc.http import JsonRpcClient
    async with JsonRpcClient("https://mainnet.infura.io/v3/<key>") as rpc:
        data = await rpc.eth_call("0xD1E5...", "0x6352211e...")
"""

from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from ..errors import RpcError
from ..logging import get_logger
from ..version import __version__ as SDK_VERSION

log = get_logger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]


def _build_headers(extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    hdrs = {
        "content-type": "application/json",
        "accept": "application/json",
        "user-agent": f"resolution-py/{SDK_VERSION}",
    }
    if extra:
        hdrs.update(extra)
    return hdrs


class JsonRpcClient:
    """Minimal async JSON-RPC 2.0 client over HTTP."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self._ids: Iterator[int] = count(1)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=_build_headers(headers),
            transport=transport,
        )

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "JsonRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # --- public API ------------------------------------------------------

    async def request(self, method: str, params: Optional[Sequence[Any]] = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": list(params or [])}
        log.debug("rpc_call", method=method, id=payload["id"])
        try:
            r = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise RpcError(method=method, code=-32098, message="Network error", data=str(e)) from e

        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                method=method,
                code=-32603,
                message="Non-JSON response from RPC",
                data=r.text[:256],
                http_status=r.status_code,
            ) from e

        if not isinstance(resp, dict):
            raise RpcError(method=method, code=-32603, message="Invalid JSON-RPC response type", data=type(resp).__name__)
        if resp.get("error") is not None:
            err = resp["error"]
            if not isinstance(err, dict):
                raise RpcError(method=method, code=-32603, message=str(err), http_status=r.status_code)
            code = err.get("code")
            raise RpcError(
                method=method,
                code=code if isinstance(code, int) else -32603,
                message=str(err.get("message", "Unknown error")),
                data=err.get("data"),
                http_status=r.status_code,
            )
        if "result" not in resp:
            raise RpcError(method=method, code=-32603, message="Malformed JSON-RPC response", data=resp, http_status=r.status_code)
        return resp["result"]

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str:
        """Read-only contract call; returns the raw 0x-hex return data."""
        result = await self.request("eth_call", [{"to": to, "data": data}, block])
        if not isinstance(result, str):
            raise RpcError(method="eth_call", code=-32603, message="eth_call returned a non-string result", data=result)
        return result


__all__ = ["JsonRpcClient"]
