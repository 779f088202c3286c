"""Tests for local request validation."""

import pytest

from conftest import EVM_ADDRESS, SOLANA_ADDRESS
from clawswap.errors import ValidationError
from clawswap.models import QuoteRequest
from clawswap.validation import (
    is_base58_address,
    is_evm_address,
    validate_address,
    validate_amount,
    validate_order_id,
    validate_quote_request,
    validate_slippage,
)


class TestAmount:
    """Tests for amount validation."""

    @pytest.mark.parametrize("amount", ["1", "1000000", "0.5", "10.000001"])
    def test_valid(self, amount):
        assert validate_amount(amount) == amount

    @pytest.mark.parametrize(
        "amount",
        ["0", "0.0", "-1", "1e6", "1E-5", "1e10", "abc", "", " 1", "1.", ".5", "Infinity", "NaN", "+1"],
    )
    def test_invalid(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            validate_amount(amount)
        assert exc_info.value.field == "amount"
        assert exc_info.value.message == "Amount must be a positive number"

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            validate_amount(1000)


class TestAddress:
    """Tests for address validation."""

    def test_evm(self):
        assert is_evm_address(EVM_ADDRESS)
        assert validate_address(EVM_ADDRESS, "sender_address") == EVM_ADDRESS

    def test_base58(self):
        assert is_base58_address(SOLANA_ADDRESS)
        assert validate_address(SOLANA_ADDRESS, "recipient_address") == SOLANA_ADDRESS

    @pytest.mark.parametrize(
        "address",
        [
            "0x123",
            "0x" + "g" * 40,
            "0x" + "a" * 41,
            "0" * 40,
            "short",
            "O" * 40,  # 'O' is not base58
            "1" * 45,
        ],
    )
    def test_invalid(self, address):
        with pytest.raises(ValidationError) as exc_info:
            validate_address(address, "sender_address")
        assert exc_info.value.field == "sender_address"
        assert "Invalid sender address format" in exc_info.value.message

    def test_empty_is_required(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_address("", "recipient_address")
        assert exc_info.value.message == "Recipient address is required"


class TestSlippage:
    """Tests for slippage validation."""

    @pytest.mark.parametrize("value", [None, 0, 0.01, 0.5, 1])
    def test_valid(self, value):
        assert validate_slippage(value) == value

    @pytest.mark.parametrize("value", [-0.01, 1.5, "0.1", True])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_slippage(value)
        assert exc_info.value.field == "slippage_tolerance"


class TestQuoteRequest:
    """Tests for full quote request validation."""

    def test_valid_mapping_returns_model(self, quote_payload):
        request = validate_quote_request(quote_payload)

        assert isinstance(request, QuoteRequest)
        assert request.source_chain_id == "solana"
        assert request.amount == "1000000"

    def test_valid_model_returned_unchanged(self, quote_payload):
        request = QuoteRequest(**quote_payload)
        assert validate_quote_request(request) is request

    def test_snake_case_mapping(self, quote_payload):
        snake = QuoteRequest(**quote_payload).model_dump()
        assert validate_quote_request(snake) == QuoteRequest(**quote_payload)

    @pytest.mark.parametrize(
        "key,field,message",
        [
            ("sourceChainId", "source_chain_id", "Source chain ID is required"),
            ("sourceTokenAddress", "source_token_address", "Source token address is required"),
            ("destinationChainId", "destination_chain_id", "Destination chain ID is required"),
            ("destinationTokenAddress", "destination_token_address", "Destination token address is required"),
            ("amount", "amount", "Amount is required"),
            ("senderAddress", "sender_address", "Sender address is required"),
            ("recipientAddress", "recipient_address", "Recipient address is required"),
        ],
    )
    def test_missing_field(self, quote_payload, key, field, message):
        del quote_payload[key]
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(quote_payload)
        assert exc_info.value.field == field
        assert exc_info.value.message == message

    def test_first_violation_reported(self, quote_payload):
        """Test only the first bad field in declaration order is reported."""
        quote_payload["amount"] = "-5"
        quote_payload["senderAddress"] = "bad"
        del quote_payload["recipientAddress"]

        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(quote_payload)
        assert exc_info.value.field == "amount"

    def test_bad_sender_before_missing_recipient(self, quote_payload):
        quote_payload["senderAddress"] = "bad"
        del quote_payload["recipientAddress"]

        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(quote_payload)
        assert exc_info.value.field == "sender_address"

    def test_slippage_checked_last(self, quote_payload):
        quote_payload["slippageTolerance"] = 2
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(quote_payload)
        assert exc_info.value.field == "slippage_tolerance"

    def test_invalid_model_values(self, quote_payload):
        quote_payload["amount"] = "1e6"
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(QuoteRequest(**quote_payload))
        assert exc_info.value.field == "amount"

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_request(["not", "a", "request"])
        assert exc_info.value.field == "request"


class TestOrderId:
    def test_valid(self):
        assert validate_order_id("ord_123") == "ord_123"

    @pytest.mark.parametrize("value", ["", None, 123])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_id(value)
        assert exc_info.value.message == "Order ID is required"
