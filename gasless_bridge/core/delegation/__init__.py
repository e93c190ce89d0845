"""EIP-7702 delegation classification."""

from .models import CodeClassification, DelegationState, DelegationStatus
from .resolver import DelegationChecker, classify_code, resolve

__all__ = [
    "CodeClassification",
    "DelegationState",
    "DelegationStatus",
    "DelegationChecker",
    "classify_code",
    "resolve",
]
