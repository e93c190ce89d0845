"""Subsidized quote requests against Relay's pricing endpoint."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from ..constants import NATIVE_PLACEHOLDER
from ..errors import QuoteRejected
from .models import Quote, QuoteRequest


logger = logging.getLogger(__name__)


class QuoteClient:
    """Requests a priced, fee-annotated transaction plan for a bridge."""

    def __init__(self, provider, *, max_subsidization_amount: Optional[str] = None) -> None:
        self._provider = provider
        self._max_subsidization_amount = max_subsidization_amount

    async def request_quote(
        self,
        *,
        user: str,
        origin_chain_id: int,
        destination_chain_id: int,
        amount: int,
        currency: str = NATIVE_PLACEHOLDER,
        subsidize: bool = True,
        max_subsidy_usd: Optional[str] = None,
        recipient: Optional[str] = None,
    ) -> Quote:
        """Fetch a quote. An empty ``steps`` list is valid: nothing to execute."""

        request = QuoteRequest(
            user=user,
            origin_chain_id=origin_chain_id,
            destination_chain_id=destination_chain_id,
            origin_currency=currency,
            destination_currency=currency,
            amount=str(amount),
            recipient=recipient or user,
            subsidize_fees=subsidize,
            max_subsidization_amount=max_subsidy_usd or self._max_subsidization_amount,
        )
        body = await self._provider.quote(request.to_payload())

        try:
            quote = Quote.model_validate(body)
            quote.deposit_call()  # malformed deposit items fail here, not mid-flow
        except ValidationError as exc:
            raise QuoteRejected(200, f"Unexpected quote shape: {exc}") from exc

        logger.info(
            "Quote requestId=%s steps=%d transaction_step=%s",
            quote.request_id,
            len(quote.steps),
            quote.transaction_step() is not None,
        )
        return quote
