"""Off-chain EIP-7702 authorization signing with a local key."""

from __future__ import annotations

import logging
from typing import Optional, Union

from eth_account import Account
from eth_utils import to_checksum_address

from ..errors import SigningUnavailable
from .models import Authorization, ReusedDelegation, SignedAuthorization


logger = logging.getLogger(__name__)


def _hex32(value: Union[int, bytes]) -> str:
    if isinstance(value, (bytes, bytearray)):
        value = int.from_bytes(value, "big")
    return "0x" + format(value, "064x")


class AuthorizationSigner:
    """
    Produces the user's 7702 authorization delegating their EOA to the router.

    The authorization targets the Relay erc20Router, not the deposit target.
    Signing is gasless; the nonce is the account's current on-chain
    transaction count at signing time.
    """

    def __init__(self, chain_reader, *, private_key: Optional[str] = None) -> None:
        self._chain_reader = chain_reader
        try:
            self._account = Account.from_key(private_key) if private_key else None
        except ValueError as exc:
            raise SigningUnavailable("USER_PRIVATE_KEY is not a valid secp256k1 private key") from exc

    @property
    def can_sign(self) -> bool:
        return self._account is not None

    @property
    def address(self) -> Optional[str]:
        return self._account.address if self._account is not None else None

    async def authorize(
        self,
        delegate_target: str,
        chain_id: int,
        *,
        already_delegated: bool,
    ) -> Authorization:
        if already_delegated:
            return ReusedDelegation(chain_id=chain_id, address=to_checksum_address(delegate_target))

        if self._account is None:
            raise SigningUnavailable(
                "No USER_PRIVATE_KEY set. In production, use wallet_sendCalls (ERC-5792) "
                "or signAuthorization() from the connected wallet."
            )

        nonce = await self._chain_reader.get_transaction_count(self._account.address, chain_id)
        logger.info(
            "Signing 7702 authorization %s -> %s on chain %s (nonce=%s)",
            self._account.address,
            delegate_target,
            chain_id,
            nonce,
        )
        signed = self._account.sign_authorization(
            {
                "chainId": chain_id,
                "address": to_checksum_address(delegate_target),
                "nonce": nonce,
            }
        )
        return SignedAuthorization(
            chain_id=int(signed.chain_id),
            address=to_checksum_address(signed.address),
            nonce=int(signed.nonce),
            y_parity=int(signed.y_parity),
            r=_hex32(signed.r),
            s=_hex32(signed.s),
        )
