"""HTTP transport with timeout and error mapping.

One call, one request: no retries happen here. The request capability is an
``httpx.AsyncClient``; pass a payment-augmented client (e.g. an x402 httpx
client) to satisfy 402 challenges transparently.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from clawswap.config import ClientConfig
from clawswap.errors import ClawSwapError, NetworkError, TimeoutExceededError, map_api_error

logger = logging.getLogger(__name__)


class HttpTransport:
    """Issues single HTTP requests against the ClawSwap API."""

    def __init__(self, config: ClientConfig, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize transport.

        Args:
            config: Client configuration (base URL, timeout, headers)
            http_client: Injected client; never closed by the transport.
                When omitted a short-lived client is opened per call.
        """
        self.config = config
        self._http_client = http_client

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            yield client

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **self.config.headers}

    async def send(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            TimeoutExceededError: No response within ``config.timeout``
            NetworkError: Connection failure or undecodable success body
            ClawSwapError: Mapped server error for non-2xx responses
        """
        url = f"{self.config.base_url}{path}"
        content = json.dumps(body) if body is not None else None

        logger.debug(f"{method} {url}")
        try:
            async with self._client() as client:
                response = await asyncio.wait_for(
                    client.request(method, url, headers=self._headers(), content=content),
                    timeout=self.config.timeout,
                )
        except ClawSwapError:
            raise
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {url} timed out after {self.config.timeout}s")
            raise TimeoutExceededError(
                "Request timed out",
                suggestion="Increase the client timeout or retry later",
                details={"url": url, "timeout_seconds": self.config.timeout},
            ) from e
        except Exception as e:
            logger.warning(f"{method} {url} failed: {type(e).__name__}: {e}")
            raise NetworkError(
                str(e) or None,
                details={"url": url, "cause": type(e).__name__},
            ) from e

        if not response.is_success:
            raise self._error_from_response(response, url)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(
                "Malformed response body",
                details={"url": url, "status_code": response.status_code},
            ) from e

    def _error_from_response(self, response: httpx.Response, url: str) -> ClawSwapError:
        try:
            body = response.json()
        except ValueError:
            body = {"error": {"message": response.reason_phrase or f"HTTP {response.status_code}"}}

        error = map_api_error(response.status_code, body)
        logger.warning(f"API error {response.status_code} from {url}: {error.code} - {error.message}")
        return error

    async def get(self, path: str) -> Any:
        return await self.send(path, "GET")

    async def post(self, path: str, body: Any) -> Any:
        return await self.send(path, "POST", body)
