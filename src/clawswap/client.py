"""ClawSwap client facade.

Quote, execute, track and discover cross-chain swaps. Every operation
validates its input locally before any request is sent.

Example:
    async with x402_httpx_client(wallet) as http:  # optional payment support
        client = ClawSwapClient(http_client=http)
        quote = await client.get_quote(request)
        swap = await client.execute_swap(request)
        final = await client.wait_for_settlement(swap.order_id)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, TypeVar, Union
from urllib.parse import quote as url_quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clawswap.config import ClientConfig
from clawswap.errors import NetworkError, TimeoutExceededError, UnsupportedRouteError
from clawswap.models import (
    Chain,
    ExecuteSwapResponse,
    QuoteRequest,
    QuoteResponse,
    StatusResponse,
    SwapFeeResponse,
    Token,
    TokenPair,
)
from clawswap.polling import poll
from clawswap.transport import HttpTransport
from clawswap.validation import validate_chain_id, validate_order_id, validate_quote_request

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

QUOTE_PATH = "/api/swap/quote"
EXECUTE_PATH = "/api/swap/execute"
STATUS_PATH = "/api/swap/{order_id}/status"
FEE_PATH = "/api/swap/fee"
CHAINS_PATH = "/api/chains"
TOKENS_PATH = "/api/tokens/{chain_id}"


def _segment(value: str) -> str:
    return url_quote(value, safe="")


class ClawSwapClient:
    """Async client for the ClawSwap cross-chain swap API.

    Holds configuration only; no response state survives between calls.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        **overrides: Any,
    ):
        """Initialize the client.

        Args:
            config: Full configuration; built from environment settings if None
            http_client: Request capability, e.g. an x402-wrapped httpx client
            **overrides: base_url, timeout, headers, terminal_statuses,
                poll_timeout or poll_interval applied on top of settings
        """
        if config is None:
            config = ClientConfig.from_settings(**overrides)
        elif overrides:
            values = config.model_dump()
            for key, value in overrides.items():
                if value is None:
                    continue
                if key == "headers":
                    values["headers"] = {**values["headers"], **value}
                else:
                    values[key] = value
            config = ClientConfig(**values)
        self.config = config
        self._transport = HttpTransport(config, http_client)

    # ======================
    # Helpers
    # ======================

    def _parse(self, model: type[ModelT], data: Any, path: str) -> ModelT:
        """Validate a response body, reporting malformed payloads as network errors."""
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"Malformed {model.__name__} from {path}: {e.error_count()} error(s)")
            raise NetworkError(
                f"Malformed response from {path}",
                details={"path": path, "errors": e.errors(include_url=False)},
            ) from e

    def _parse_list(self, model: type[ModelT], data: Any, key: str, path: str) -> list[ModelT]:
        items = data.get(key) if isinstance(data, Mapping) else None
        if not isinstance(items, list):
            raise NetworkError(
                f"Malformed response from {path}: missing '{key}' list",
                details={"path": path},
            )
        return [self._parse(model, item, path) for item in items]

    # ======================
    # Swaps
    # ======================

    async def get_quote(self, request: Union[QuoteRequest, Mapping]) -> QuoteResponse:
        """Get a quote for a cross-chain swap.

        Free and idempotent; no payment required.
        """
        validated = validate_quote_request(request)
        data = await self._transport.post(QUOTE_PATH, validated.to_payload())
        return self._parse(QuoteResponse, data, QUOTE_PATH)

    async def execute_swap(self, request: Union[QuoteRequest, Mapping]) -> ExecuteSwapResponse:
        """Execute a cross-chain swap.

        Takes the same request as ``get_quote``; the server re-prices it.
        The endpoint is x402-protected, so ``http_client`` must be able to pay.
        Not idempotent and never retried here: after a timeout the order may
        or may not exist, so check status before trying again.

        Returns:
            Either an EVM-source or Solana-source response; use
            ``clawswap.discriminator.require_classified`` before signing.
        """
        validated = validate_quote_request(request)
        try:
            data = await self._transport.post(EXECUTE_PATH, validated.to_payload())
        except TimeoutExceededError as e:
            details = dict(e.details or {})
            details["order_state"] = "unknown"
            raise TimeoutExceededError(
                "Execute request timed out; the swap may or may not have been created",
                suggestion="Check swap status before retrying to avoid a duplicate order",
                details=details,
            ) from e

        response = self._parse(ExecuteSwapResponse, data, EXECUTE_PATH)
        logger.info(f"Swap executed: order {response.order_id} on {response.source_chain_id}")
        return response

    async def get_status(self, order_id: str) -> StatusResponse:
        """Get the current status of a swap. Free and idempotent."""
        validate_order_id(order_id)
        path = STATUS_PATH.format(order_id=_segment(order_id))
        data = await self._transport.get(path)
        return self._parse(StatusResponse, data, path)

    async def wait_for_settlement(
        self,
        order_id: str,
        *,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        on_status_update: Optional[Callable[[StatusResponse], None]] = None,
        terminal_statuses: Optional[Iterable[str]] = None,
    ) -> StatusResponse:
        """Poll status until the swap reaches a terminal state.

        Args:
            order_id: Identifier returned by ``execute_swap``
            timeout: Total wait in seconds (config default: 300)
            interval: Seconds between polls (config default: 3)
            on_status_update: Called once per poll with every status seen
            terminal_statuses: Override the configured terminal set

        Raises:
            TimeoutExceededError: Swap not settled within ``timeout``
        """
        validate_order_id(order_id)
        terminal = frozenset(terminal_statuses) if terminal_statuses is not None else self.config.terminal_statuses
        last_status: list[Optional[str]] = [None]

        def observe(status: StatusResponse) -> None:
            if status.status != last_status[0]:
                logger.info(f"Swap {order_id}: {last_status[0] or 'start'} -> {status.status}")
                last_status[0] = status.status
            if on_status_update is not None:
                on_status_update(status)

        result = await poll(
            lambda: self.get_status(order_id),
            lambda status: not status.is_terminal(terminal),
            timeout=self.config.poll_timeout if timeout is None else timeout,
            interval=self.config.poll_interval if interval is None else interval,
            on_update=observe,
        )
        logger.info(f"Swap {order_id} settled with status {result.status}")
        return result

    # ======================
    # Discovery
    # ======================

    async def get_swap_fee(self) -> SwapFeeResponse:
        """Get the current x402 fee charged per swap execution."""
        data = await self._transport.get(FEE_PATH)
        return self._parse(SwapFeeResponse, data, FEE_PATH)

    async def get_supported_chains(self) -> list[Chain]:
        """List supported chains (cached upstream for up to an hour)."""
        data = await self._transport.get(CHAINS_PATH)
        return self._parse_list(Chain, data, "chains", CHAINS_PATH)

    async def get_supported_tokens(self, chain_id: str) -> list[Token]:
        """List supported tokens on a chain (cached upstream for up to an hour)."""
        validate_chain_id(chain_id)
        path = TOKENS_PATH.format(chain_id=_segment(chain_id))
        data = await self._transport.get(path)
        return self._parse_list(Token, data, "tokens", path)

    async def get_supported_pairs(self) -> list[TokenPair]:
        """Derive every cross-chain pair from discovery data.

        Each chain's token list is fetched once, however many chains there
        are; same-chain pairs are skipped.
        """
        chains = await self.get_supported_chains()

        tokens_by_chain: dict[str, list[Token]] = {}
        for chain in chains:
            if chain.id not in tokens_by_chain:
                tokens_by_chain[chain.id] = await self.get_supported_tokens(chain.id)

        pairs: list[TokenPair] = []
        for source_chain in chains:
            for source_token in tokens_by_chain[source_chain.id]:
                for destination_chain in chains:
                    if destination_chain.id == source_chain.id:
                        continue
                    for destination_token in tokens_by_chain[destination_chain.id]:
                        pairs.append(
                            TokenPair(
                                source_chain=source_chain,
                                source_token=source_token,
                                destination_chain=destination_chain,
                                destination_token=destination_token,
                            )
                        )

        logger.debug(f"Derived {len(pairs)} pairs from {len(tokens_by_chain)} chains")
        return pairs

    async def get_token_info(self, chain_id: str, token_address: str) -> Token:
        """Look up one token's metadata (e.g. decimals) on a chain.

        Raises:
            UnsupportedRouteError: Token not listed on that chain
        """
        tokens = await self.get_supported_tokens(chain_id)
        for token in tokens:
            if token.address == token_address:
                return token
            if token_address.startswith("0x") and token.address.lower() == token_address.lower():
                return token
        raise UnsupportedRouteError(
            f"Token {token_address} not found on chain {chain_id}",
            details={"chain_id": chain_id, "token_address": token_address},
        )
