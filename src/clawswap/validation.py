"""Local request validation.

Pure functions: each returns its input unchanged or raises
``ValidationError`` naming the first violated field. Nothing here touches
the network.
"""

import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from clawswap.errors import ValidationError
from clawswap.models import QuoteRequest

EVM_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")
BASE58_ADDRESS_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")

# Plain integer or decimal; no sign, exponent, whitespace or Infinity
AMOUNT_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

AMOUNT_MESSAGE = "Amount must be a positive number"

# Checked in this order; the first failure is reported
QUOTE_REQUEST_FIELDS = (
    "source_chain_id",
    "source_token_address",
    "destination_chain_id",
    "destination_token_address",
    "amount",
    "sender_address",
    "recipient_address",
)

FIELD_LABELS = {
    "source_chain_id": "Source chain ID",
    "source_token_address": "Source token address",
    "destination_chain_id": "Destination chain ID",
    "destination_token_address": "Destination token address",
    "amount": "Amount",
    "sender_address": "Sender address",
    "recipient_address": "Recipient address",
    "slippage_tolerance": "Slippage tolerance",
    "order_id": "Order ID",
    "chain_id": "Chain ID",
}


def _label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def _require_string(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(field, f"{_label(field)} is required")
    return value


def validate_chain_id(value: Any, field: str = "chain_id") -> str:
    """Chain ids only need to be present; the server is authoritative."""
    return _require_string(value, field)


def validate_token_address(value: Any, field: str) -> str:
    return _require_string(value, field)


def validate_order_id(value: Any) -> str:
    return _require_string(value, "order_id")


def is_evm_address(value: str) -> bool:
    return bool(EVM_ADDRESS_RE.fullmatch(value))


def is_base58_address(value: str) -> bool:
    return bool(BASE58_ADDRESS_RE.fullmatch(value))


def validate_address(value: Any, field: str) -> str:
    """Accept an EVM (0x + 40 hex) or base58 (32-44 chars) address."""
    address = _require_string(value, field)
    if not (is_evm_address(address) or is_base58_address(address)):
        raise ValidationError(
            field,
            f"Invalid {_label(field).lower()} format (must be EVM 0x... or Solana base58)",
        )
    return address


def validate_amount(value: Any, field: str = "amount") -> str:
    """Validate a positive plain-decimal amount string.

    Exponent notation is rejected: downstream systems expect integer-like
    smallest-unit strings.
    """
    if not isinstance(value, str) or not AMOUNT_RE.fullmatch(value):
        raise ValidationError(field, AMOUNT_MESSAGE)
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValidationError(field, AMOUNT_MESSAGE)
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(field, AMOUNT_MESSAGE)
    return value


def validate_slippage(value: Any, field: str = "slippage_tolerance") -> Optional[float]:
    """Slippage is optional; when present it must lie in [0, 1]."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, f"{_label(field)} must be a number between 0 and 1")
    if not 0 <= value <= 1:
        raise ValidationError(field, f"{_label(field)} must be between 0 and 1")
    return value


_FIELD_VALIDATORS = {
    "source_chain_id": validate_chain_id,
    "source_token_address": validate_token_address,
    "destination_chain_id": validate_chain_id,
    "destination_token_address": validate_token_address,
    "amount": validate_amount,
    "sender_address": validate_address,
    "recipient_address": validate_address,
}


def _normalize(request: Union[QuoteRequest, Mapping]) -> dict:
    """Read a request or mapping into snake_case keys."""
    if isinstance(request, QuoteRequest):
        return request.model_dump()
    if not isinstance(request, Mapping):
        raise ValidationError("request", "Quote request must be a QuoteRequest or a mapping")

    camel = {
        "sourceChainId": "source_chain_id",
        "sourceTokenAddress": "source_token_address",
        "destinationChainId": "destination_chain_id",
        "destinationTokenAddress": "destination_token_address",
        "amount": "amount",
        "senderAddress": "sender_address",
        "recipientAddress": "recipient_address",
        "slippageTolerance": "slippage_tolerance",
    }
    data = {}
    for key, value in request.items():
        data[camel.get(key, key)] = value
    return data


def validate_quote_request(request: Union[QuoteRequest, Mapping]) -> QuoteRequest:
    """Validate a quote/execute request, stopping at the first bad field."""
    data = _normalize(request)

    for field in QUOTE_REQUEST_FIELDS:
        value = data.get(field)
        if value is None:
            raise ValidationError(field, f"{_label(field)} is required")
        _FIELD_VALIDATORS[field](value, field)
    validate_slippage(data.get("slippage_tolerance"))

    if isinstance(request, QuoteRequest):
        return request

    try:
        return QuoteRequest(**{k: data.get(k) for k in (*QUOTE_REQUEST_FIELDS, "slippage_tolerance")})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else "request"
        raise ValidationError(field, first.get("msg", "Invalid request")) from e
