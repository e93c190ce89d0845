"""Human-readable narration of the gasless bridge flow."""

from __future__ import annotations

import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional, TextIO

from eth_utils import from_wei

from .core.authorization import PlaceholderAuthorization, ReusedDelegation
from .core.constants import chain_name
from .core.delegation import DelegationState, DelegationStatus
from .core.execution import ExecuteResponse, ExecutionRequest, StatusSnapshot
from .core.flow import BridgeParams, FlowObserver, FlowOutcome, FlowResult
from .core.quote import CallData, CurrencyAmount, Quote

BOX_WIDTH = 48


def format_usd(amount: Optional[CurrencyAmount]) -> str:
    usd = amount.usd if amount is not None else None
    if usd is None:
        return "$0.00"
    try:
        return f"${usd.quantize(Decimal('0.0001'))}"
    except InvalidOperation:
        return f"${usd}"


def render_banner() -> str:
    return "\n".join([
        "╔════════════════════════════════════════════════════╗",
        "║  Relay Protocol: Full Subsidy EOA (Gasless)        ║",
        "║  BYO Wallet + EIP-7702 + /execute                  ║",
        "║                                                    ║",
        "║  User signs a 7702 authorization (no gas).         ║",
        "║  Sponsor's relayer submits + pays for everything.  ║",
        "╚════════════════════════════════════════════════════╝",
    ])


def render_step(number: int, title: str) -> str:
    return f"\n━━━ Step {number}: {title} ━━━\n"


def _box_line(text: str) -> str:
    return f"  │{text.ljust(BOX_WIDTH)}│"


def render_fee_breakdown(quote: Quote) -> str:
    """Fee table for a subsidized quote.

    The user always pays $0.00 here: subsidizeFees covers destination gas,
    relayer and app fees, and the sponsor's relayer pays origin gas through
    /execute.
    """
    fees = quote.fees
    border = "─" * BOX_WIDTH
    lines: List[str] = [
        f"  ┌{border}┐",
        _box_line("FEE BREAKDOWN".center(BOX_WIDTH)),
        f"  ├{border}┤",
    ]

    rows = [
        ("Origin gas", fees.gas),
        ("Dest gas (relayerGas)", fees.relayer_gas),
        ("Relayer service", fees.relayer_service),
        ("App fee", fees.app),
    ]
    for label, fee in rows:
        if fee is None:
            continue
        formatted = fee.amount_formatted or "0"
        lines.append(f"  │  {label:<22} {formatted:>14} {fee.symbol:<5} ({format_usd(fee)})")

    lines.append(f"  ├{border}┤")
    if fees.subsidized is not None:
        lines.append(_box_line(f"  SUBSIDIZED (sponsor)  {format_usd(fees.subsidized):>22}"))
    lines.append(_box_line(f"  USER PAYS  {'$0.00':>34}"))
    lines.append(_box_line(""))
    lines.append(_box_line("  Origin gas is ALSO covered: the sponsor's"))
    lines.append(_box_line("  relayer submits the tx via POST /execute."))
    lines.append(f"  └{border}┘")

    details = quote.details
    if details is not None and details.currency_out is not None:
        out = details.currency_out
        out_chain = out.currency.chain_id if out.currency else None
        lines.append(f"\n  User receives: {out.amount_formatted} {out.symbol} on chain {out_chain}")
        lines.append("  (Zero deductions, sponsor covered everything)")
    if details is not None and details.time_estimate:
        lines.append(f"  Estimated time: ~{details.time_estimate:g}s")
    return "\n".join(lines)


def render_delegation(state: DelegationState) -> str:
    lines = [
        f"  EOA:               {state.address}",
        f"  Chain:             {state.chain_id}",
        f"  Relay erc20Router: {state.delegate_address}",
        "",
    ]
    status = state.status
    if status == DelegationStatus.SKIPPED:
        lines.append("  [DRY RUN] Skipping on-chain delegation check.")
        lines.append("  In production, call getCode(eoaAddress) to check if the")
        lines.append("  EOA is already delegated to the Relay erc20Router.")
    elif status == DelegationStatus.NOT_DELEGATED:
        lines.append("  Status: NOT delegated (plain EOA)")
        lines.append("  → User will need to sign a 7702 authorization.")
    elif status == DelegationStatus.DELEGATED_TO_EXPECTED:
        lines.append("  Status: ✓ Already delegated to Relay erc20Router")
        lines.append(f"  Delegate: {state.current_delegate}")
    elif status == DelegationStatus.DELEGATED_TO_OTHER:
        lines.append("  Status: Delegated to a DIFFERENT contract")
        lines.append(f"  Current:  {state.current_delegate}")
        lines.append(f"  Expected: {state.delegate_address}")
        lines.append("  → User will need to sign a new 7702 authorization.")
    return "\n".join(lines)


def render_quote_request(params: BridgeParams, user_address: str) -> str:
    return "\n".join([
        f"  Origin:      {chain_name(params.origin_chain_id)} ({params.origin_chain_id})",
        f"  Destination: {chain_name(params.destination_chain_id)} ({params.destination_chain_id})",
        f"  Amount:      {from_wei(params.amount_wei, 'ether')} ETH",
        f"  User:        {user_address}",
        "  Subsidized:  true (app pays ALL fees)",
    ])


def render_deposit_call(call: CallData, delegation: DelegationState) -> str:
    return "\n".join([
        f"  Deposit tx target: {call.to}",
        f"  Deposit tx value:  {call.value} wei",
        f"  Chain:             {call.chain_id}",
        f"  Delegate contract: {delegation.delegate_address}",
        f"  Already delegated: {str(delegation.is_delegated).lower()}",
    ])


def render_execution_request(request: ExecutionRequest) -> str:
    return "\n".join([
        "  Request body:",
        f"    executionKind:  {request.execution_kind}",
        f"    chain:          {request.chain_id}",
        f"    target:         {request.to}",
        f"    subsidizeFees:  {str(request.subsidize_fees).lower()}",
        f"    requestId:      {request.request_id or '(generated by solver)'}",
        f"    authList:       {request.authorization_summary}",
    ])


class ConsoleReporter(FlowObserver):
    """Prints step-by-step narration as the flow reports stage results."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out or sys.stdout
        self._user_address = ""

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def on_start(self, params: BridgeParams, user_address: str) -> None:
        self._print(render_banner())
        self._user_address = user_address
        self._print(render_step(0, "Check EIP-7702 delegation"))

    def on_delegation(self, state: DelegationState) -> None:
        self._print(render_delegation(state))
        self._print()

    def on_quote(self, quote: Quote, params: BridgeParams) -> None:
        self._print(render_step(1, "Get subsidized quote"))
        self._print(render_quote_request(params, self._user_address))
        self._print()
        self._print(render_fee_breakdown(quote))

    def on_deposit_call(self, deposit_call: Optional[CallData], delegation: DelegationState) -> None:
        self._print(render_step(2, "Sign EIP-7702 authorization"))
        if deposit_call is None:
            self._print("  ⚠ No transaction step found in quote, nothing to sign.\n")
            return
        self._print(render_deposit_call(deposit_call, delegation))
        self._print()

    def on_authorization(self, authorization, user_address: str) -> None:
        if isinstance(authorization, ReusedDelegation):
            self._print("  ✓ EOA already delegated, skipping authorization.\n")
        elif isinstance(authorization, PlaceholderAuthorization):
            self._print(f"  [SKIP] {authorization.reason}")
            self._print(f"  Using {PlaceholderAuthorization.label}; it is never submitted.\n")
        else:
            self._print("  ✓ Authorization signed")
            self._print(f"  EOA {user_address} → delegates to {authorization.address}\n")

    def on_execution_request(self, request: ExecutionRequest) -> None:
        self._print(render_step(3, "Submit via /execute (gasless)"))
        self._print(render_execution_request(request))
        self._print()

    def on_execution_skipped(self, reason: str, request_id: Optional[str]) -> None:
        if reason == "dry run":
            self._print("  [DRY RUN] Skipping /execute call. Request body is valid.\n")
        else:
            self._print("  [SKIP] No RELAY_API_KEY set. The /execute endpoint")
            self._print("  requires an x-api-key header with a key that has a")
            self._print("  funded sponsoringWalletAddress configured.\n")
        self._print(render_step(4, "Monitor relay execution"))
        self._print(f"  Request ID: {request_id or '(none)'}")
        self._print("  [SKIP] Polling skipped (dry run or no API key).\n")

    def on_submitted(self, response: ExecuteResponse) -> None:
        self._print(f"  ✓ {response.message}")
        self._print(f"  Request ID: {response.request_id}\n")
        self._print(render_step(4, "Monitor relay execution"))
        self._print(f"  Request ID: {response.request_id}")

    def on_poll(self, attempt: int, max_attempts: int, snapshot: StatusSnapshot) -> None:
        self._print(f"  [{attempt}/{max_attempts}] Status: {snapshot.status}")
        if snapshot.is_success:
            self._print("\n  ✅ Bridge complete!")
            if snapshot.destination_tx_hash:
                self._print(f"  Destination tx: {snapshot.destination_tx_hash}")

    def on_finish(self, result: FlowResult) -> None:
        if result.outcome == FlowOutcome.NOTHING_TO_EXECUTE:
            self._print("  No transaction to execute. Done.\n")
            return
        self._print("\n━━━ Done ━━━\n")
