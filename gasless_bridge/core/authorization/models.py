"""
EIP-7702 authorization variants.

Only ``SignedAuthorization`` ever reaches the relay's ``authorizationList``.
``ReusedDelegation`` stands for an on-chain delegation that already points at
the router and contributes no entry. ``PlaceholderAuthorization`` is a
labelled dry-run stand-in and is refused by the submitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from ..errors import PlaceholderAuthorizationRejected


@dataclass(frozen=True)
class SignedAuthorization:
    """A real authorization tuple signed by the user's key."""
    chain_id: int
    address: str            # Delegate target (Relay erc20Router)
    nonce: int
    y_parity: int
    r: str
    s: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "address": self.address,
            "nonce": self.nonce,
            "yParity": self.y_parity,
            "r": self.r,
            "s": self.s,
        }


@dataclass(frozen=True)
class ReusedDelegation:
    """The account is already delegated to ``address``; no signature needed."""
    chain_id: int
    address: str


@dataclass(frozen=True)
class PlaceholderAuthorization:
    """Dry-run stand-in used when no signing capability is configured."""
    chain_id: int
    address: str
    reason: str

    label = "DRY RUN PLACEHOLDER (unsigned)"


Authorization = Union[SignedAuthorization, ReusedDelegation, PlaceholderAuthorization]


def authorization_list(authorization: Authorization) -> List[Dict[str, Any]]:
    """Entries to send as ``authorizationList`` for the given variant."""

    if isinstance(authorization, SignedAuthorization):
        return [authorization.to_payload()]
    if isinstance(authorization, ReusedDelegation):
        return []
    if isinstance(authorization, PlaceholderAuthorization):
        raise PlaceholderAuthorizationRejected(
            "Refusing to transmit a placeholder authorization: " + authorization.reason
        )
    raise TypeError(f"Unknown authorization variant: {type(authorization).__name__}")
