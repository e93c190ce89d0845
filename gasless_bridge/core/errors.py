"""
Error taxonomy for the gasless bridge flow.

Every error aborts the run. Nothing here is retried; the status poll is a wait
for the relay to finish, not a retry of a failed call.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Categories used to group failures in logs and CLI output."""

    CONFIGURATION = "configuration"   # Missing key, router or RPC
    ACCOUNT = "account"               # Account kind does not fit the 7702 flow
    CHAIN = "chain"                   # JSON-RPC read failed
    PROVIDER = "provider"             # Relay API rejected a request
    EXECUTION = "execution"           # Relay reported a terminal failure
    TIMEOUT = "timeout"               # Poll budget exhausted


class GaslessBridgeError(Exception):
    """Base class for every failure surfaced by the flow."""

    category: ErrorCategory = ErrorCategory.PROVIDER

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedChain(GaslessBridgeError):
    """No router or RPC endpoint configured for a chain."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, chain_id: Optional[int] = None):
        super().__init__(message)
        self.chain_id = chain_id


class UnsupportedAccountKind(GaslessBridgeError):
    """The address holds contract code that is not a 7702 delegation."""

    category = ErrorCategory.ACCOUNT

    def __init__(self, address: str):
        super().__init__(
            f"Address {address} has non-7702 contract code. "
            "This is likely a smart contract wallet, not an EOA. "
            "Use the EIP-4337 flow instead."
        )
        self.address = address


class ChainReadError(GaslessBridgeError):
    """JSON-RPC call failed at the transport or returned an error object."""

    category = ErrorCategory.CHAIN


class RelayRequestRejected(GaslessBridgeError):
    """Relay API answered with a non-success status or not at all."""

    label = "Request"

    def __init__(self, status_code: Optional[int], body: str):
        status = status_code if status_code is not None else "no response"
        super().__init__(f"{self.label} failed ({status}): {body}")
        self.status_code = status_code
        self.body = body


class QuoteRejected(RelayRequestRejected):
    """POST /quote returned a non-success response."""

    label = "Quote"


class ExecutionRejected(RelayRequestRejected):
    """POST /execute returned a non-success response."""

    label = "Execute"


class StatusQueryFailed(RelayRequestRejected):
    """GET /intents/status/v3 returned a non-success response."""

    label = "Status query"


class SigningUnavailable(GaslessBridgeError):
    """No signing capability configured (distinct from a signing failure)."""

    category = ErrorCategory.CONFIGURATION


class PlaceholderAuthorizationRejected(GaslessBridgeError):
    """A demo placeholder authorization reached the network submitter."""

    category = ErrorCategory.CONFIGURATION


class RelayExecutionFailed(GaslessBridgeError):
    """The relay reported a terminal ``failure`` or ``refund``."""

    category = ErrorCategory.EXECUTION

    def __init__(self, status: str, request_id: Optional[str] = None):
        super().__init__(f"Relay failed with status: {status}")
        self.status = status
        self.request_id = request_id


class PollTimeout(GaslessBridgeError):
    """Status never became terminal within the attempt budget."""

    category = ErrorCategory.TIMEOUT

    def __init__(self, request_id: str, attempts: int):
        super().__init__(
            f"Polling timed out after {attempts} attempts. "
            f"Check status manually: cli.py status {request_id}"
        )
        self.request_id = request_id
        self.attempts = attempts


__all__ = [
    "ErrorCategory",
    "GaslessBridgeError",
    "UnsupportedChain",
    "UnsupportedAccountKind",
    "ChainReadError",
    "RelayRequestRejected",
    "QuoteRejected",
    "ExecutionRejected",
    "StatusQueryFailed",
    "SigningUnavailable",
    "PlaceholderAuthorizationRejected",
    "RelayExecutionFailed",
    "PollTimeout",
]
