"""ClawSwap cross-chain swap client.

Quote, execute and track swaps between Solana and EVM chains:
- ClawSwapClient: async facade over the ClawSwap HTTP API
- Validation: requests are checked locally before any network call
- Errors: one typed error per wire code, see ``clawswap.errors``
- Discriminator: tells EVM-source from Solana-source execute responses
"""

import logging

from clawswap.client import ClawSwapClient
from clawswap.config import ClientConfig, Settings, get_settings
from clawswap.discriminator import (
    SourceKind,
    classify,
    is_evm_source,
    is_evm_transaction,
    is_solana_source,
    require_classified,
)
from clawswap.errors import (
    AmountTooHighError,
    AmountTooLowError,
    ClawSwapError,
    ErrorCode,
    GasExceedsThresholdError,
    InsufficientLiquidityError,
    MissingFieldError,
    NetworkError,
    PaymentRequiredError,
    QuoteFailedError,
    RateLimitExceededError,
    RelayUnavailableError,
    TimeoutExceededError,
    UnclassifiedResponseError,
    UnsupportedChainError,
    UnsupportedRouteError,
    ValidationError,
    map_api_error,
)
from clawswap.models import (
    Chain,
    EvmTransaction,
    ExecuteSwapResponse,
    QuoteRequest,
    QuoteResponse,
    StatusResponse,
    SwapFeeResponse,
    SwapStatus,
    Token,
    TokenPair,
)
from clawswap.polling import is_terminal_status, poll
from clawswap.validation import validate_quote_request

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Client
    "ClawSwapClient",
    "ClientConfig",
    "Settings",
    "get_settings",
    # Models
    "Chain",
    "EvmTransaction",
    "ExecuteSwapResponse",
    "QuoteRequest",
    "QuoteResponse",
    "StatusResponse",
    "SwapFeeResponse",
    "SwapStatus",
    "Token",
    "TokenPair",
    # Discrimination
    "SourceKind",
    "classify",
    "is_evm_source",
    "is_evm_transaction",
    "is_solana_source",
    "require_classified",
    # Errors
    "AmountTooHighError",
    "AmountTooLowError",
    "ClawSwapError",
    "ErrorCode",
    "GasExceedsThresholdError",
    "InsufficientLiquidityError",
    "MissingFieldError",
    "NetworkError",
    "PaymentRequiredError",
    "QuoteFailedError",
    "RateLimitExceededError",
    "RelayUnavailableError",
    "TimeoutExceededError",
    "UnclassifiedResponseError",
    "UnsupportedChainError",
    "UnsupportedRouteError",
    "ValidationError",
    "map_api_error",
    # Helpers
    "is_terminal_status",
    "poll",
    "validate_quote_request",
]
