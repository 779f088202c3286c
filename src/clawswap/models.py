"""Request and response contracts for the ClawSwap HTTP API.

Python attributes are snake_case; the wire is camelCase. Every model accepts
either spelling on input and serializes camelCase with ``by_alias=True``.
Response models keep unknown fields so newer server payloads still parse.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from clawswap.polling import TERMINAL_STATUSES_V2, is_terminal_status

# Fee name -> formatted string or numeric USD value
FeeBreakdown = dict[str, Union[float, str]]


class _WireModel(BaseModel):
    """Immutable camelCase wire model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class SwapStatus(str, Enum):
    """Swap statuses observed across API revisions."""

    PENDING = "pending"
    CREATED = "created"
    SUBMITTED = "submitted"
    BRIDGING = "bridging"
    SETTLING = "settling"
    FULFILLED = "fulfilled"
    COMPLETED = "completed"
    FAILED = "failed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


# ======================
# Requests
# ======================


class QuoteRequest(BaseModel):
    """Quote and execute request body.

    Construction does not check values; ``validate_quote_request`` does, so
    the client can report the first offending field.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    source_chain_id: str = Field(..., description="Source chain identifier (e.g. solana)")
    source_token_address: str = Field(..., description="Token address on the source chain")
    destination_chain_id: str = Field(..., description="Destination chain identifier (e.g. base)")
    destination_token_address: str = Field(..., description="Token address on the destination chain")
    amount: str = Field(..., description="Amount in smallest units, plain decimal string")
    sender_address: str = Field(..., description="Sender wallet on the source chain")
    recipient_address: str = Field(..., description="Recipient wallet on the destination chain")
    slippage_tolerance: Optional[float] = Field(None, description="Slippage tolerance, 0-1 (0.01 = 1%)")

    def to_payload(self) -> dict:
        """Return the camelCase JSON body, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ======================
# Quote
# ======================


class RouteInfo(_WireModel):
    """Source/destination description of a quoted route."""

    source_chain: str
    destination_chain: str
    source_token: str
    destination_token: str


class QuoteResponse(_WireModel):
    """Server-computed quote."""

    estimated_output: str = Field(..., description="Estimated output in smallest units")
    estimated_output_formatted: Optional[str] = Field(None, description="Human readable output")
    estimated_time: float = Field(..., description="Estimated settlement time in seconds")
    fees: FeeBreakdown = Field(default_factory=dict, description="Named fee components")
    route: Optional[RouteInfo] = None
    supported: bool = Field(..., description="Whether the route is currently swappable")

    # Present on older API revisions
    quote_id: Optional[str] = None
    expires_at: Optional[str] = None
    expires_in: Optional[int] = None


# ======================
# Execute
# ======================


class EvmTransaction(_WireModel):
    """One EVM transaction to sign and submit, in order."""

    to: str
    data: str
    value: str = "0"
    chain_id: Union[int, str]
    description: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _value_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ExecuteSwapResponse(_WireModel):
    """Execute response.

    Structurally either Solana-source (``transaction``) or EVM-source
    (``transactions``); see ``clawswap.discriminator.classify``.
    """

    transaction: Optional[str] = Field(None, description="Base64 partially-signed Solana transaction")
    transactions: Optional[list[EvmTransaction]] = Field(None, description="Ordered EVM transactions")
    order_id: str = Field(
        ...,
        validation_alias=AliasChoices("orderId", "requestId", "order_id"),
        description="Identifier for status polling",
    )
    source_chain_id: Optional[str] = None
    estimated_output: Optional[str] = None
    estimated_time: Optional[float] = None
    fees: FeeBreakdown = Field(default_factory=dict)
    instructions: Optional[Union[str, list[str]]] = None


# ======================
# Status
# ======================


class StatusResponse(_WireModel):
    """Swap status snapshot."""

    order_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("orderId", "requestId", "order_id")
    )
    status: str
    source_chain_id: Optional[str] = None
    destination_chain_id: Optional[str] = None
    source_amount: Optional[str] = None
    destination_amount: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("destinationAmount", "outputAmount", "destination_amount"),
    )
    source_tx_hash: Optional[str] = None
    destination_tx_hash: Optional[str] = None
    completed_at: Optional[str] = None
    explorer_url: Optional[str] = None
    failure_reason: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def is_terminal(self, terminal_statuses: Iterable[str] = TERMINAL_STATUSES_V2) -> bool:
        """Whether polling should stop; pass the client's configured set for v1 servers."""
        return is_terminal_status(self.status, terminal_statuses)

    @property
    def is_successful(self) -> bool:
        return self.status in (SwapStatus.COMPLETED.value, SwapStatus.FULFILLED.value)


# ======================
# Discovery
# ======================


class NativeCurrency(_WireModel):
    symbol: str
    decimals: int


class Chain(_WireModel):
    """A supported chain."""

    id: str
    name: str
    native_currency: Optional[NativeCurrency] = None
    block_explorer_url: Optional[str] = None
    is_testnet: Optional[bool] = None


class TransferFeeConfig(_WireModel):
    transfer_fee_basis_points: int
    maximum_fee: str


class Token(_WireModel):
    """A supported token on one chain."""

    address: str
    symbol: str
    decimals: int
    name: Optional[str] = None
    chain_id: Optional[str] = None
    logo_uri: Optional[str] = None
    is_token2022: Optional[bool] = None
    transfer_fee_config: Optional[TransferFeeConfig] = None


class TokenPair(_WireModel):
    """A cross-chain swap pair derived from discovery data."""

    source_chain: Chain
    source_token: Token
    destination_chain: Chain
    destination_token: Token


class SwapFeeResponse(_WireModel):
    """Per-swap x402 fee."""

    amount: float
    currency: str
    network: Optional[str] = None
    description: Optional[str] = None
