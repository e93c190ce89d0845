"""Submits the sponsored deposit through Relay's /execute endpoint.

Instead of the user broadcasting the origin transaction and paying gas, the
signed authorization and deposit call go to /execute and the sponsor's
relayer submits them.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from ...config import settings
from ..authorization.models import Authorization
from ..errors import ExecutionRejected
from ..quote.models import CallData, Quote
from .models import ExecuteResponse, ExecutionRequest


logger = logging.getLogger(__name__)


class ExecutionSubmitter:
    def __init__(self, provider, *, referrer: Optional[str] = None) -> None:
        self._provider = provider
        self._referrer = referrer or settings.referrer

    @property
    def can_submit(self) -> bool:
        return bool(self._provider.has_api_key)

    def build_request(
        self,
        quote: Quote,
        deposit_call: CallData,
        authorization: Authorization,
    ) -> ExecutionRequest:
        return ExecutionRequest(
            chain_id=deposit_call.chain_id,
            to=deposit_call.to,
            data=deposit_call.data,
            value=deposit_call.value or "0",
            authorization=authorization,
            referrer=self._referrer,
            subsidize_fees=True,
            request_id=quote.request_id,
        )

    async def send(self, request: ExecutionRequest) -> ExecuteResponse:
        payload = request.to_payload()
        body = await self._provider.execute(payload)
        try:
            response = ExecuteResponse.model_validate(body)
        except ValidationError as exc:
            raise ExecutionRejected(200, f"Unexpected execute response: {body}") from exc

        logger.info("Execution accepted requestId=%s: %s", response.request_id, response.message)
        return response

    async def submit(
        self,
        quote: Quote,
        deposit_call: CallData,
        authorization: Authorization,
    ) -> str:
        """Build, send and return the relay-assigned request id."""
        response = await self.send(self.build_request(quote, deposit_call, authorization))
        return response.request_id
