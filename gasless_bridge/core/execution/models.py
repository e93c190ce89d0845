"""
Execution request and status models for Relay's /execute flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..authorization.models import (
    Authorization,
    PlaceholderAuthorization,
    ReusedDelegation,
    authorization_list,
)
from ..quote.models import RelayModel


class RelayStatus(str, Enum):
    """Status values reported by /intents/status/v3."""
    WAITING = "waiting"
    PENDING = "pending"
    SUBMITTED = "submitted"
    SUCCESS = "success"
    FAILURE = "failure"
    REFUND = "refund"


TERMINAL_FAILURE_STATUSES = {RelayStatus.FAILURE, RelayStatus.REFUND}


class StatusSnapshot(RelayModel):
    """GET /intents/status/v3 response; only the latest one is kept."""

    status: str
    in_tx_hashes: Optional[List[str]] = Field(default=None, alias="inTxHashes")
    tx_hashes: Optional[List[str]] = Field(default=None, alias="txHashes")

    @property
    def relay_status(self) -> Optional[RelayStatus]:
        try:
            return RelayStatus(self.status)
        except ValueError:
            return None

    @property
    def is_success(self) -> bool:
        return self.relay_status == RelayStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.relay_status in TERMINAL_FAILURE_STATUSES

    @property
    def destination_tx_hash(self) -> Optional[str]:
        return self.tx_hashes[0] if self.tx_hashes else None


class ExecuteResponse(RelayModel):
    """POST /execute response."""

    message: str = ""
    request_id: str = Field(alias="requestId")


@dataclass(frozen=True)
class ExecutionRequest:
    """POST /execute body for a sponsored raw call."""
    chain_id: int
    to: str
    data: str
    value: str
    authorization: Authorization
    referrer: str
    subsidize_fees: bool = True
    request_id: Optional[str] = None            # From /quote, marks a cross-chain request
    execution_kind: str = "rawCalls"

    @property
    def authorization_summary(self) -> str:
        if isinstance(self.authorization, ReusedDelegation):
            return "none (existing delegation reused)"
        if isinstance(self.authorization, PlaceholderAuthorization):
            return f"1 {PlaceholderAuthorization.label}"
        return "1 signed authorization"

    def to_payload(self) -> Dict[str, Any]:
        """Wire body. Raises for a placeholder authorization."""
        payload: Dict[str, Any] = {
            "executionKind": self.execution_kind,
            "data": {
                "chainId": self.chain_id,
                "to": self.to,
                "data": self.data,
                "value": self.value or "0",
                "authorizationList": authorization_list(self.authorization),
            },
            "executionOptions": {
                "referrer": self.referrer,
                "subsidizeFees": self.subsidize_fees,
            },
        }
        if self.request_id:
            payload["requestId"] = self.request_id
        return payload
