"""EIP-7702 authorization variants and signer."""

from .models import (
    Authorization,
    PlaceholderAuthorization,
    ReusedDelegation,
    SignedAuthorization,
    authorization_list,
)
from .signer import AuthorizationSigner

__all__ = [
    "Authorization",
    "AuthorizationSigner",
    "PlaceholderAuthorization",
    "ReusedDelegation",
    "SignedAuthorization",
    "authorization_list",
]
