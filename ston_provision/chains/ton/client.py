"""TON JSON-RPC client with endpoint fallback."""
from __future__ import annotations

import asyncio
import base64
import logging
import ssl
from typing import Any

import aiohttp
import certifi
from pytoniq_core import Address, Cell, begin_cell

from ...config import ChainConfig
from ...errors import TransportFailure

logger = logging.getLogger(__name__)


class TonClient:
    """toncenter-compatible RPC client with automatic endpoint fallback."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.api_key = config.api_key
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Call a toncenter JSON-RPC method, rotating endpoints on failure.

        toncenter wraps every reply as ``{"ok": bool, "result" | "error", "code"}``;
        a reply with ``ok`` false counts as a failed endpoint.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        last_error: Exception | None = None
        for rpc_index in self._endpoint_order():
            rpc_url = self.endpoints[rpc_index]
            try:
                body = await self._post(rpc_url, payload)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                continue

            if not body.get("ok", "error" not in body):
                last_error = RuntimeError(f"{body.get('code', 'error')}: {body.get('error')}")
                logger.warning("RPC endpoint %s rejected %s: %s", rpc_url, method, last_error)
                continue

            self._remember_endpoint(rpc_index)
            return body.get("result", {})

        raise TransportFailure(f"All RPC endpoints failed. Last error: {last_error}")

    def _endpoint_order(self) -> list[int]:
        count = len(self.endpoints)
        return [(self.current_rpc_index + i) % count for i in range(count)]

    def _remember_endpoint(self, rpc_index: int) -> None:
        if rpc_index != self.current_rpc_index:
            logger.info("Switched to RPC endpoint: %s", self.endpoints[rpc_index])
            self.current_rpc_index = rpc_index

    async def _post(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
            async with session.post(url, json=payload, headers=headers) as response:
                # Rejections arrive with a 4xx status and a JSON body
                return await response.json(content_type=None)

    async def run_get_method(
        self, address: str, method: str, stack: list[list[Any]]
    ) -> dict[str, Any]:
        """Run a contract get-method; raises on a non-zero exit code."""
        result = await self.rpc_call(
            "runGetMethod", {"address": address, "method": method, "stack": stack}
        )
        exit_code = result.get("exit_code", 0)
        if exit_code != 0:
            raise TransportFailure(
                f"Get-method {method} on {address} exited with code {exit_code}"
            )
        return result

    async def get_wallet_address(self, jetton_master: str, owner: str) -> str:
        """Resolve the jetton wallet of ``owner`` for a jetton master."""
        owner_slice = begin_cell().store_address(Address(owner)).end_cell()
        stack = [["tvm.Slice", base64.b64encode(owner_slice.to_boc()).decode()]]

        result = await self.run_get_method(jetton_master, "get_wallet_address", stack)
        try:
            entry = result["stack"][0][1]
            cell = Cell.one_from_boc(base64.b64decode(entry["bytes"]))
            address = cell.begin_parse().load_address()
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise TransportFailure(
                f"Unexpected get_wallet_address response from {jetton_master}: {e}"
            ) from e

        logger.debug("Wallet of %s for master %s: %s", owner, jetton_master, address)
        return address.to_str()
