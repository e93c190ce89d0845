"""Async client for Relay's quote, execute and status endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

import httpx

from ..config import settings
from ..core.constants import RELAY_STATUS_PATH
from ..core.errors import ExecutionRejected, QuoteRejected, StatusQueryFailed, RelayRequestRejected


logger = logging.getLogger(__name__)


class RelayProvider:
    """Thin wrapper around https://api.relay.link endpoints.

    /quote takes the API key as a bearer token, /execute takes it in an
    ``x-api-key`` header and the status endpoint is unauthenticated.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (base_url or settings.relay_api_url).rstrip("/")
        self.api_key = settings.relay_api_key if api_key is None else api_key
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._client = client

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "user-agent": "GaslessBridgeClient/0.1",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        error_cls: Type[RelayRequestRejected],
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        merged_headers = {**self._headers(), **(headers or {})}

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, json=json, params=params, headers=merged_headers, timeout=self.timeout_s
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    response = await client.request(method, url, json=json, params=params, headers=merged_headers)
        except httpx.RequestError as exc:
            logger.warning("Relay %s %s transport error: %s", method, path, exc)
            raise error_cls(None, str(exc)) from exc

        if response.is_error:
            logger.warning("Relay %s %s returned %s: %s", method, path, response.status_code, response.text)
            raise error_cls(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise error_cls(response.status_code, f"Invalid JSON body: {response.text}") from exc

    async def quote(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Request a priced, fee-annotated plan from ``POST /quote``."""

        headers = {"authorization": f"Bearer {self.api_key}"} if self.api_key else None
        logger.info(
            "Requesting quote %s -> %s for %s",
            payload.get("originChainId"),
            payload.get("destinationChainId"),
            payload.get("amount"),
        )
        return await self._request("POST", "/quote", error_cls=QuoteRejected, json=payload, headers=headers)

    async def execute(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Submit a sponsored execution to ``POST /execute``."""

        if not self.api_key:
            raise ExecutionRejected(
                None,
                "The /execute endpoint requires an x-api-key header with a funded sponsoring wallet",
            )
        logger.info("Submitting execution requestId=%s", payload.get("requestId"))
        return await self._request(
            "POST",
            "/execute",
            error_cls=ExecutionRejected,
            json=payload,
            headers={"x-api-key": self.api_key},
        )

    async def status(self, request_id: str) -> Dict[str, Any]:
        """Fetch the current execution status for ``request_id``."""

        return await self._request(
            "GET",
            RELAY_STATUS_PATH,
            error_cls=StatusQueryFailed,
            params={"requestId": request_id},
        )
