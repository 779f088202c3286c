"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from clawswap import ClawSwapClient

BASE_URL = "https://api.test"

EVM_ADDRESS = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
SOLANA_ADDRESS = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
USDC_SOLANA = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDC_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], Any]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def json_bodies(self) -> list[Any]:
        return [json.loads(request.content) if request.content else None for request in self.requests]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


@pytest.fixture
def quote_payload() -> dict:
    """A valid Solana -> Base quote request in wire (camelCase) form."""
    return {
        "sourceChainId": "solana",
        "sourceTokenAddress": USDC_SOLANA,
        "destinationChainId": "base",
        "destinationTokenAddress": USDC_BASE,
        "amount": "1000000",
        "senderAddress": SOLANA_ADDRESS,
        "recipientAddress": EVM_ADDRESS,
    }


@pytest.fixture
def quote_response_payload() -> dict:
    return {
        "estimatedOutput": "998000",
        "estimatedOutputFormatted": "0.998",
        "estimatedTime": 30,
        "fees": {"clawswap": 0, "relay": "0.002", "gas": "0.001"},
        "route": {
            "sourceChain": "solana",
            "destinationChain": "base",
            "sourceToken": "USDC",
            "destinationToken": "USDC",
        },
        "supported": True,
    }


@pytest.fixture
def mock_transport() -> Callable[[Callable[[httpx.Request], Any]], RecordingTransport]:
    """Factory for recording mock transports."""
    return RecordingTransport


@pytest.fixture
def make_client() -> Callable[..., tuple[ClawSwapClient, RecordingTransport]]:
    """Factory returning a client wired to a recording mock transport."""

    def factory(
        handler: Callable[[httpx.Request], Any],
        base_url: str = BASE_URL,
        timeout: Optional[float] = 5.0,
        **overrides: Any,
    ) -> tuple[ClawSwapClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        http_client = httpx.AsyncClient(transport=transport)
        client = ClawSwapClient(
            http_client=http_client,
            base_url=base_url,
            timeout=timeout,
            **overrides,
        )
        return client, transport

    return factory
