"""
Gasless bridge orchestration.

Sequences the fully sponsored flow:

  0. Check the EOA's EIP-7702 delegation to the Relay erc20Router
  1. POST /quote for the requestId and deposit call
  2. Sign a 7702 authorization (skipped when already delegated)
  3. POST /execute so the sponsor submits and pays for the origin tx
  4. Poll status until the destination execution is terminal

Every step is awaited in order; no requests overlap. Stage results are
reported to a ``FlowObserver`` and returned in a ``FlowResult``; rendering
lives in ``gasless_bridge.presentation``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from eth_utils import to_wei

from ..config import Settings, settings as default_settings
from ..logging_config import bind_flow_context, clear_flow_context
from ..providers.relay import RelayProvider
from ..providers.rpc import ChainReader
from .authorization import Authorization, AuthorizationSigner, PlaceholderAuthorization
from .constants import NATIVE_PLACEHOLDER
from .delegation import DelegationChecker, DelegationState
from .errors import SigningUnavailable
from .execution import ExecuteResponse, ExecutionRequest, ExecutionSubmitter, StatusPoller, StatusSnapshot
from .quote import CallData, Quote, QuoteClient


logger = logging.getLogger(__name__)

DRY_RUN_REQUEST_ID = "dry-run-request-id"


class FlowOutcome(str, Enum):
    COMPLETED = "completed"                     # Relay reported success
    NOTHING_TO_EXECUTE = "nothing_to_execute"   # Quote had no transaction step
    SKIPPED = "skipped"                         # No relay API key, /execute not called
    DRY_RUN = "dry_run"                         # Request built, not submitted


@dataclass(frozen=True)
class BridgeParams:
    origin_chain_id: int
    destination_chain_id: int
    amount_wei: int
    currency: str = NATIVE_PLACEHOLDER
    max_subsidization_amount: Optional[str] = None
    dry_run: bool = False

    @classmethod
    def from_settings(cls, cfg: Settings) -> "BridgeParams":
        return cls(
            origin_chain_id=cfg.origin_chain_id,
            destination_chain_id=cfg.destination_chain_id,
            amount_wei=to_wei(cfg.bridge_amount_eth, "ether"),
            max_subsidization_amount=cfg.max_subsidization_amount,
            dry_run=cfg.dry_run,
        )


@dataclass
class FlowResult:
    outcome: FlowOutcome
    user_address: str
    delegation: DelegationState
    quote: Quote
    deposit_call: Optional[CallData] = None
    authorization: Optional[Authorization] = None
    execution_request: Optional[ExecutionRequest] = None
    request_id: Optional[str] = None
    final_status: Optional[StatusSnapshot] = None
    skip_reason: Optional[str] = None


class FlowObserver:
    """Receives stage results as the flow progresses. Methods are no-ops."""

    def on_start(self, params: BridgeParams, user_address: str) -> None:
        pass

    def on_delegation(self, state: DelegationState) -> None:
        pass

    def on_quote(self, quote: Quote, params: BridgeParams) -> None:
        pass

    def on_deposit_call(self, deposit_call: Optional[CallData], delegation: DelegationState) -> None:
        pass

    def on_authorization(self, authorization: Authorization, user_address: str) -> None:
        pass

    def on_execution_request(self, request: ExecutionRequest) -> None:
        pass

    def on_execution_skipped(self, reason: str, request_id: Optional[str]) -> None:
        pass

    def on_submitted(self, response: ExecuteResponse) -> None:
        pass

    def on_poll(self, attempt: int, max_attempts: int, snapshot: StatusSnapshot) -> None:
        pass

    def on_finish(self, result: FlowResult) -> None:
        pass


class GaslessBridgeFlow:
    def __init__(
        self,
        *,
        delegation: DelegationChecker,
        quotes: QuoteClient,
        signer: AuthorizationSigner,
        submitter: ExecutionSubmitter,
        poller: StatusPoller,
        demo_user_address: str,
        observer: Optional[FlowObserver] = None,
    ) -> None:
        self._delegation = delegation
        self._quotes = quotes
        self._signer = signer
        self._submitter = submitter
        self._poller = poller
        self._demo_user_address = demo_user_address
        self._observer = observer or FlowObserver()

    @classmethod
    def from_settings(
        cls,
        cfg: Optional[Settings] = None,
        *,
        observer: Optional[FlowObserver] = None,
    ) -> "GaslessBridgeFlow":
        cfg = cfg or default_settings
        relay = RelayProvider(
            base_url=cfg.relay_api_url,
            api_key=cfg.relay_api_key,
            timeout_s=cfg.request_timeout_seconds,
        )
        chain_reader = ChainReader(rpc_url_for=cfg.rpc_url_for, timeout_s=cfg.request_timeout_seconds)
        return cls(
            delegation=DelegationChecker(chain_reader),
            quotes=QuoteClient(relay, max_subsidization_amount=cfg.max_subsidization_amount),
            signer=AuthorizationSigner(chain_reader, private_key=cfg.user_private_key or None),
            submitter=ExecutionSubmitter(relay, referrer=cfg.referrer),
            poller=StatusPoller(
                relay,
                interval_s=cfg.poll_interval_seconds,
                max_attempts=cfg.poll_max_attempts,
            ),
            demo_user_address=cfg.demo_user_address,
            observer=observer,
        )

    @property
    def user_address(self) -> str:
        return self._signer.address or self._demo_user_address

    async def check_delegation(self, address: str, chain_id: int) -> DelegationState:
        state = await self._delegation.check(address, chain_id)
        self._observer.on_delegation(state)
        return state

    async def run(self, params: BridgeParams) -> FlowResult:
        observer = self._observer
        user_address = self.user_address
        clear_flow_context()
        bind_flow_context(origin_chain_id=params.origin_chain_id, destination_chain_id=params.destination_chain_id)
        observer.on_start(params, user_address)

        # 0. Delegation
        if params.dry_run and not self._signer.can_sign:
            delegation = self._delegation.skipped(user_address, params.origin_chain_id)
        else:
            delegation = await self._delegation.check(user_address, params.origin_chain_id)
        observer.on_delegation(delegation)

        # 1. Quote
        quote = await self._quotes.request_quote(
            user=user_address,
            origin_chain_id=params.origin_chain_id,
            destination_chain_id=params.destination_chain_id,
            amount=params.amount_wei,
            currency=params.currency,
            subsidize=True,
            max_subsidy_usd=params.max_subsidization_amount,
        )
        observer.on_quote(quote, params)

        deposit_call = quote.deposit_call()
        observer.on_deposit_call(deposit_call, delegation)
        if deposit_call is None:
            return self._finish(
                FlowResult(
                    outcome=FlowOutcome.NOTHING_TO_EXECUTE,
                    user_address=user_address,
                    delegation=delegation,
                    quote=quote,
                )
            )

        # 2. Authorization
        try:
            authorization = await self._signer.authorize(
                delegation.delegate_address,
                deposit_call.chain_id,
                already_delegated=delegation.is_delegated,
            )
        except SigningUnavailable as exc:
            if not params.dry_run:
                raise
            logger.warning("Signing unavailable in dry run, using placeholder: %s", exc)
            authorization = PlaceholderAuthorization(
                chain_id=deposit_call.chain_id,
                address=delegation.delegate_address,
                reason=exc.message,
            )
        observer.on_authorization(authorization, user_address)

        # 3. Execute
        request = self._submitter.build_request(quote, deposit_call, authorization)
        observer.on_execution_request(request)

        result = FlowResult(
            outcome=FlowOutcome.DRY_RUN,
            user_address=user_address,
            delegation=delegation,
            quote=quote,
            deposit_call=deposit_call,
            authorization=authorization,
            execution_request=request,
        )

        if params.dry_run:
            result.request_id = quote.request_id or DRY_RUN_REQUEST_ID
            result.skip_reason = "dry run"
            observer.on_execution_skipped(result.skip_reason, result.request_id)
            return self._finish(result)

        if not self._submitter.can_submit:
            result.outcome = FlowOutcome.SKIPPED
            result.request_id = quote.request_id
            result.skip_reason = "no relay API key"
            observer.on_execution_skipped(result.skip_reason, result.request_id)
            return self._finish(result)

        response = await self._submitter.send(request)
        observer.on_submitted(response)
        result.request_id = response.request_id
        bind_flow_context(request_id=response.request_id)

        # 4. Poll
        result.final_status = await self._poller.poll_until_terminal(
            response.request_id,
            on_snapshot=observer.on_poll,
        )
        result.outcome = FlowOutcome.COMPLETED
        return self._finish(result)

    async def poll(self, request_id: str) -> StatusSnapshot:
        """Poll an existing request, e.g. to follow up after a timeout."""
        return await self._poller.poll_until_terminal(request_id, on_snapshot=self._observer.on_poll)

    def _finish(self, result: FlowResult) -> FlowResult:
        logger.info("Flow finished: %s (requestId=%s)", result.outcome.value, result.request_id)
        self._observer.on_finish(result)
        return result
