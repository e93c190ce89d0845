"""Wire models for Relay's /quote request and response."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RelayModel(BaseModel):
    """Base for Relay payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class StepKind(str, Enum):
    TRANSACTION = "transaction"
    SIGNATURE = "signature"


class CurrencyInfo(RelayModel):
    chain_id: Optional[int] = Field(default=None, alias="chainId")
    address: Optional[str] = None
    symbol: str = ""
    name: str = ""
    decimals: Optional[int] = None


class CurrencyAmount(RelayModel):
    """A fee or amount as reported by Relay: raw, formatted and USD."""

    currency: Optional[CurrencyInfo] = None
    amount: str = "0"
    amount_formatted: str = Field(default="0", alias="amountFormatted")
    amount_usd: Optional[str] = Field(default=None, alias="amountUsd")

    @property
    def symbol(self) -> str:
        return self.currency.symbol if self.currency else ""

    @property
    def usd(self) -> Optional[Decimal]:
        if not self.amount_usd:
            return None
        try:
            usd = Decimal(str(self.amount_usd))
        except InvalidOperation:
            return None
        return usd if usd.is_finite() else None


class CallData(RelayModel):
    """A ready-to-send call taken from a transaction step item."""

    from_address: Optional[str] = Field(default=None, alias="from")
    to: str
    data: str = "0x"
    value: str = "0"
    chain_id: int = Field(alias="chainId")

    @field_validator("value", mode="before")
    @classmethod
    def _default_value(cls, value: Any) -> str:
        return str(value) if value not in (None, "") else "0"


class StepItem(RelayModel):
    status: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    def call_data(self) -> Optional[CallData]:
        """Parse ``data`` as a call; signature items carry a different shape."""
        if not self.data:
            return None
        return CallData.model_validate(self.data)


class QuoteStep(RelayModel):
    id: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
    kind: str
    items: List[StepItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return value or []

    @property
    def is_transaction(self) -> bool:
        return self.kind == StepKind.TRANSACTION.value


class FeeSet(RelayModel):
    gas: Optional[CurrencyAmount] = None                     # Origin chain gas
    relayer: Optional[CurrencyAmount] = None
    relayer_gas: Optional[CurrencyAmount] = Field(default=None, alias="relayerGas")          # Destination gas
    relayer_service: Optional[CurrencyAmount] = Field(default=None, alias="relayerService")
    app: Optional[CurrencyAmount] = None
    subsidized: Optional[CurrencyAmount] = None


class QuoteDetails(RelayModel):
    operation: Optional[str] = None
    time_estimate: Optional[float] = Field(default=None, alias="timeEstimate")
    sender: Optional[str] = None
    recipient: Optional[str] = None
    currency_in: Optional[CurrencyAmount] = Field(default=None, alias="currencyIn")
    currency_out: Optional[CurrencyAmount] = Field(default=None, alias="currencyOut")


class Quote(RelayModel):
    """POST /quote response (subset of fields the flow uses)."""

    request_id: Optional[str] = Field(default=None, alias="requestId")
    steps: List[QuoteStep] = Field(default_factory=list)
    fees: FeeSet = Field(default_factory=FeeSet)
    details: Optional[QuoteDetails] = None

    @field_validator("steps", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return value or []

    @field_validator("fees", mode="before")
    @classmethod
    def _none_to_fees(cls, value: Any) -> Any:
        return value or {}

    def transaction_step(self) -> Optional[QuoteStep]:
        """First transaction-kind step; the flow consumes at most one."""
        for step in self.steps:
            if step.is_transaction:
                return step
        return None

    def deposit_call(self) -> Optional[CallData]:
        """The deposit call the sponsor submits, or None if nothing to execute."""
        step = self.transaction_step()
        if step is None or not step.items:
            return None
        return step.items[0].call_data()


class QuoteRequest(RelayModel):
    """POST /quote request body."""

    user: str
    origin_chain_id: int = Field(alias="originChainId")
    destination_chain_id: int = Field(alias="destinationChainId")
    origin_currency: str = Field(alias="originCurrency")
    destination_currency: str = Field(alias="destinationCurrency")
    amount: str
    trade_type: str = Field(default="EXACT_INPUT", alias="tradeType")
    recipient: str
    subsidize_fees: bool = Field(default=True, alias="subsidizeFees")
    max_subsidization_amount: Optional[str] = Field(default=None, alias="maxSubsidizationAmount")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
