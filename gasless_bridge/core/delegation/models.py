"""Typed models for EIP-7702 delegation state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DelegationStatus(str, Enum):
    """Classification of an account's code slot."""
    NOT_DELEGATED = "not_delegated"                  # Empty code, plain EOA
    DELEGATED_TO_EXPECTED = "delegated_to_expected"  # 0xef0100 ++ expected router
    DELEGATED_TO_OTHER = "delegated_to_other"        # 0xef0100 ++ some other contract
    CONTRACT_CODE = "contract_code"                  # Real contract, flow does not apply
    SKIPPED = "skipped"                              # Dry run without a key, not read


STATUS_REASONS = {
    DelegationStatus.NOT_DELEGATED: "plain account",
    DelegationStatus.DELEGATED_TO_EXPECTED: "already delegated to the Relay erc20Router",
    DelegationStatus.DELEGATED_TO_OTHER: "delegated elsewhere, needs re-authorization",
    DelegationStatus.CONTRACT_CODE: "non-7702 contract code",
    DelegationStatus.SKIPPED: "on-chain check skipped (dry run)",
}


@dataclass(frozen=True)
class CodeClassification:
    """Result of classifying raw account code against a delegate address."""
    status: DelegationStatus
    current_delegate: Optional[str] = None


@dataclass(frozen=True)
class DelegationState:
    """Delegation state of one account on one chain, derived per run."""
    address: str
    chain_id: int
    delegate_address: str                       # Router the flow expects
    status: DelegationStatus
    current_delegate: Optional[str] = None      # Router found on-chain, if any

    @property
    def is_delegated(self) -> bool:
        return self.status == DelegationStatus.DELEGATED_TO_EXPECTED

    @property
    def needs_authorization(self) -> bool:
        return not self.is_delegated

    @property
    def reason(self) -> str:
        return STATUS_REASONS[self.status]
