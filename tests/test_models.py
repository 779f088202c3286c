"""Tests for request and response models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from clawswap.models import (
    Chain,
    ExecuteSwapResponse,
    QuoteRequest,
    QuoteResponse,
    StatusResponse,
    SwapFeeResponse,
    SwapStatus,
    Token,
)
from clawswap.polling import TERMINAL_STATUSES_V1


class TestQuoteRequest:
    """Tests for QuoteRequest serialization."""

    def test_payload_is_camel_case(self, quote_payload):
        request = QuoteRequest(**quote_payload)
        assert request.to_payload() == quote_payload

    def test_payload_round_trip(self, quote_payload):
        request = QuoteRequest(**{**quote_payload, "slippageTolerance": 0.01})
        assert QuoteRequest.model_validate(request.to_payload()) == request

    def test_snake_case_construction(self, quote_payload):
        request = QuoteRequest(
            source_chain_id="solana",
            source_token_address=quote_payload["sourceTokenAddress"],
            destination_chain_id="base",
            destination_token_address=quote_payload["destinationTokenAddress"],
            amount="1000000",
            sender_address=quote_payload["senderAddress"],
            recipient_address=quote_payload["recipientAddress"],
        )
        assert request == QuoteRequest(**quote_payload)

    def test_frozen(self, quote_payload):
        request = QuoteRequest(**quote_payload)
        with pytest.raises(PydanticValidationError):
            request.amount = "5"


class TestResponses:
    """Tests for response parsing."""

    def test_quote_response(self, quote_response_payload):
        quote = QuoteResponse.model_validate(quote_response_payload)

        assert quote.estimated_output == "998000"
        assert quote.estimated_time == 30
        assert quote.supported is True
        assert quote.fees["relay"] == "0.002"
        assert quote.route.source_chain == "solana"
        assert quote.quote_id is None

    def test_fractional_estimated_time(self, quote_response_payload):
        quote = QuoteResponse.model_validate({**quote_response_payload, "estimatedTime": 45.5})
        response = ExecuteSwapResponse.model_validate({"orderId": "ord", "estimatedTime": 12.25})

        assert quote.estimated_time == 45.5
        assert response.estimated_time == 12.25

    def test_quote_response_keeps_unknown_fields(self, quote_response_payload):
        quote = QuoteResponse.model_validate({**quote_response_payload, "priceImpact": "0.1"})
        assert quote.model_extra == {"priceImpact": "0.1"}

    def test_quote_response_requires_output(self, quote_response_payload):
        del quote_response_payload["estimatedOutput"]
        with pytest.raises(PydanticValidationError):
            QuoteResponse.model_validate(quote_response_payload)

    def test_execute_order_id_aliases(self):
        assert ExecuteSwapResponse.model_validate({"orderId": "a"}).order_id == "a"
        assert ExecuteSwapResponse.model_validate({"requestId": "b"}).order_id == "b"
        assert ExecuteSwapResponse.model_validate({"order_id": "c"}).order_id == "c"

    def test_evm_transaction_value_coerced(self):
        response = ExecuteSwapResponse.model_validate(
            {
                "orderId": "ord",
                "transactions": [{"to": "0x1", "data": "0x", "value": 1000, "chainId": 8453}],
            }
        )
        tx = response.transactions[0]
        assert tx.value == "1000"
        assert tx.chain_id == 8453

    def test_status_response(self):
        status = StatusResponse.model_validate(
            {
                "orderId": "ord_1",
                "status": "completed",
                "outputAmount": "998000",
                "destinationTxHash": "0xabc",
            }
        )

        assert status.order_id == "ord_1"
        assert status.destination_amount == "998000"
        assert status.destination_tx_hash == "0xabc"
        assert status.is_terminal()
        assert status.is_successful

    def test_status_unknown_value_kept(self):
        status = StatusResponse.model_validate({"status": "reorged"})
        assert status.status == "reorged"
        assert not status.is_terminal()

    def test_status_terminal_set_argument(self):
        """Test v1 servers can treat fulfilled and expired as terminal."""
        fulfilled = StatusResponse.model_validate({"status": "fulfilled"})

        assert not fulfilled.is_terminal()
        assert fulfilled.is_terminal(TERMINAL_STATUSES_V1)
        assert StatusResponse.model_validate({"status": "expired"}).is_terminal(TERMINAL_STATUSES_V1)

    def test_status_enum_values(self):
        assert SwapStatus.FULFILLED == "fulfilled"
        assert StatusResponse.model_validate({"status": SwapStatus.FAILED.value}).is_terminal()

    def test_discovery_models(self):
        chain = Chain.model_validate(
            {
                "id": "base",
                "name": "Base",
                "nativeCurrency": {"symbol": "ETH", "decimals": 18},
                "blockExplorerUrl": "https://basescan.org",
            }
        )
        token = Token.model_validate(
            {"address": "0xabc", "symbol": "USDC", "decimals": 6, "logoUri": "https://x/usdc.png"}
        )
        fee = SwapFeeResponse.model_validate({"amount": 0.5, "currency": "USDC", "network": "solana"})

        assert chain.native_currency.decimals == 18
        assert token.logo_uri == "https://x/usdc.png"
        assert fee.amount == 0.5
