"""Minimal JSON-RPC reader for the account state the delegation flow needs."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import httpx
from eth_utils import decode_hex, to_checksum_address

from ..config import settings
from ..core.errors import ChainReadError


logger = logging.getLogger(__name__)


class ChainReader:
    """Reads account code and transaction counts over JSON-RPC."""

    def __init__(
        self,
        *,
        rpc_url_for: Optional[Callable[[int], str]] = None,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._rpc_url_for = rpc_url_for or settings.rpc_url_for
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._client = client

    async def _rpc_call(self, chain_id: int, method: str, params: List[Any]) -> Any:
        """Make an RPC call to the chain."""
        rpc_url = self._rpc_url_for(chain_id)

        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1,
        }

        try:
            if self._client is not None:
                response = await self._client.post(rpc_url, json=payload, timeout=self.timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    response = await client.post(rpc_url, json=payload)
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ChainReadError(f"{method} on chain {chain_id} failed: {exc}") from exc

        if "error" in result:
            raise ChainReadError(f"RPC error: {result['error']}")

        logger.debug("%s on chain %s -> %s", method, chain_id, result.get("result"))
        return result.get("result")

    async def get_code(self, address: str, chain_id: int) -> bytes:
        """Return the code stored at ``address`` (empty for a plain EOA)."""
        result = await self._rpc_call(chain_id, "eth_getCode", [to_checksum_address(address), "latest"])
        return decode_hex(result or "0x")

    async def get_transaction_count(self, address: str, chain_id: int) -> int:
        """Return the account's current on-chain nonce."""
        result = await self._rpc_call(chain_id, "eth_getTransactionCount", [to_checksum_address(address), "latest"])
        if result is None:
            raise ChainReadError(f"eth_getTransactionCount returned no result for {address}")
        return int(result, 16)
