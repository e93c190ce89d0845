"""Relay quote models and client."""

from .client import QuoteClient
from .models import (
    CallData,
    CurrencyAmount,
    CurrencyInfo,
    FeeSet,
    Quote,
    QuoteDetails,
    QuoteRequest,
    QuoteStep,
    StepItem,
    StepKind,
)

__all__ = [
    "QuoteClient",
    "CallData",
    "CurrencyAmount",
    "CurrencyInfo",
    "FeeSet",
    "Quote",
    "QuoteDetails",
    "QuoteRequest",
    "QuoteStep",
    "StepItem",
    "StepKind",
]
