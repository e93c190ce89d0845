"""
EIP-7702 delegation detection.

When an EOA is delegated via 7702 its on-chain code is set to
``0xef0100 ++ <20-byte delegate address>``. ``getCode`` therefore tells us
whether the account is a plain EOA, already points at the Relay router,
points somewhere else, or is a real contract the 7702 flow cannot use.

Relay does not set up delegation; the app has to check and request the
user's authorization itself.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from eth_utils import encode_hex, to_checksum_address

from ..constants import DELEGATE_ADDRESS_LENGTH, EIP7702_DELEGATION_PREFIX, RELAY_ERC20_ROUTER
from ..errors import UnsupportedAccountKind, UnsupportedChain
from .models import CodeClassification, DelegationState, DelegationStatus


logger = logging.getLogger(__name__)


def classify_code(account_code: bytes, expected_delegate: str) -> CodeClassification:
    """Classify raw account code without raising."""

    if not account_code:
        return CodeClassification(DelegationStatus.NOT_DELEGATED)

    if not account_code.startswith(EIP7702_DELEGATION_PREFIX):
        return CodeClassification(DelegationStatus.CONTRACT_CODE)

    target = account_code[len(EIP7702_DELEGATION_PREFIX):]
    if len(target) == DELEGATE_ADDRESS_LENGTH:
        current = to_checksum_address(target)
    else:
        current = encode_hex(target)

    if current.lower() == expected_delegate.lower():
        return CodeClassification(DelegationStatus.DELEGATED_TO_EXPECTED, current)
    return CodeClassification(DelegationStatus.DELEGATED_TO_OTHER, current)


def resolve(
    account_code: bytes,
    expected_delegate: str,
    *,
    address: str = "",
    chain_id: int = 0,
) -> DelegationState:
    """Derive the delegation state for an account from its code.

    Raises ``UnsupportedAccountKind`` when the code is a real contract.
    """

    classification = classify_code(account_code, expected_delegate)
    if classification.status == DelegationStatus.CONTRACT_CODE:
        raise UnsupportedAccountKind(address or "<unknown>")

    return DelegationState(
        address=address,
        chain_id=chain_id,
        delegate_address=expected_delegate,
        status=classification.status,
        current_delegate=classification.current_delegate,
    )


class DelegationChecker:
    """Reads account code on-chain and resolves it against the Relay router."""

    def __init__(self, chain_reader, *, routers: Optional[Dict[int, str]] = None) -> None:
        self._chain_reader = chain_reader
        self._routers = routers if routers is not None else RELAY_ERC20_ROUTER

    def delegate_for(self, chain_id: int) -> str:
        delegate = self._routers.get(chain_id)
        if not delegate:
            raise UnsupportedChain(
                f"No Relay erc20Router address configured for chain {chain_id}.",
                chain_id=chain_id,
            )
        return to_checksum_address(delegate)

    async def check(self, address: str, chain_id: int) -> DelegationState:
        delegate = self.delegate_for(chain_id)
        code = await self._chain_reader.get_code(address, chain_id)
        state = resolve(code, delegate, address=address, chain_id=chain_id)
        logger.info(
            "Delegation for %s on chain %s: %s (current=%s)",
            address,
            chain_id,
            state.status.value,
            state.current_delegate,
        )
        return state

    def skipped(self, address: str, chain_id: int) -> DelegationState:
        """State used when the on-chain read is skipped; treated as not delegated."""
        return DelegationState(
            address=address,
            chain_id=chain_id,
            delegate_address=self.delegate_for(chain_id),
            status=DelegationStatus.SKIPPED,
        )
