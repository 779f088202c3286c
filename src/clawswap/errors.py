"""Error taxonomy for the ClawSwap client.

Every failure surfaced by the client is a ``ClawSwapError`` carrying exactly
one error code. Server envelopes are mapped with ``map_api_error``; codes the
client does not know yet are kept verbatim on a plain ``ClawSwapError`` so
callers can still branch on ``code``.
"""

import logging
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Wire error codes."""

    MISSING_FIELD = "MISSING_FIELD"
    UNSUPPORTED_CHAIN = "UNSUPPORTED_CHAIN"
    UNSUPPORTED_ROUTE = "UNSUPPORTED_ROUTE"
    QUOTE_FAILED = "QUOTE_FAILED"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    AMOUNT_TOO_LOW = "AMOUNT_TOO_LOW"
    AMOUNT_TOO_HIGH = "AMOUNT_TOO_HIGH"
    GAS_EXCEEDS_THRESHOLD = "GAS_EXCEEDS_THRESHOLD"
    RELAY_UNAVAILABLE = "RELAY_UNAVAILABLE"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"

    # Local only, never sent by the server
    INVALID_REQUEST = "INVALID_REQUEST"
    UNCLASSIFIED_RESPONSE = "UNCLASSIFIED_RESPONSE"


class ClawSwapError(Exception):
    """Base error for all ClawSwap client failures."""

    default_message = "An error occurred"

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code.value if isinstance(code, ErrorCode) else str(code)
        self.message = message or self.default_message
        self.suggestion = suggestion
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serialize to the v2 wire envelope, omitting absent keys."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.suggestion is not None:
            error["suggestion"] = self.suggestion
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class _CodedError(ClawSwapError):
    """Base for errors whose code is fixed by the class."""

    code_value: ErrorCode

    def __init__(
        self,
        message: Optional[str] = None,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(self.code_value, message, suggestion, details)


class MissingFieldError(_CodedError):
    """The server needed a field the request did not carry."""

    code_value = ErrorCode.MISSING_FIELD
    default_message = "A required field is missing"


class UnsupportedChainError(_CodedError):
    """The chain is not enabled."""

    code_value = ErrorCode.UNSUPPORTED_CHAIN
    default_message = "This chain is not supported"


class UnsupportedRouteError(_CodedError):
    """The chain pair or token route is not enabled."""

    code_value = ErrorCode.UNSUPPORTED_ROUTE
    default_message = "This route is not supported"


class QuoteFailedError(_CodedError):
    """The server could not price the route."""

    code_value = ErrorCode.QUOTE_FAILED
    default_message = "Failed to get a quote for this swap"


class InsufficientLiquidityError(_CodedError):
    """Route priced but cannot fill at the requested size."""

    code_value = ErrorCode.INSUFFICIENT_LIQUIDITY
    default_message = "Insufficient liquidity for this swap"


class AmountTooLowError(_CodedError):
    code_value = ErrorCode.AMOUNT_TOO_LOW
    default_message = "Amount is below minimum"


class AmountTooHighError(_CodedError):
    code_value = ErrorCode.AMOUNT_TOO_HIGH
    default_message = "Amount exceeds maximum"


class GasExceedsThresholdError(_CodedError):
    """Estimated gas cost is above the server's safety cutoff."""

    code_value = ErrorCode.GAS_EXCEEDS_THRESHOLD
    default_message = "Estimated gas cost exceeds the allowed threshold"


class RelayUnavailableError(_CodedError):
    """Upstream bridge/relay service is degraded."""

    code_value = ErrorCode.RELAY_UNAVAILABLE
    default_message = "Relay service is temporarily unavailable"


class PaymentRequiredError(_CodedError):
    """The call needs an x402 payment and none was attached."""

    code_value = ErrorCode.PAYMENT_REQUIRED
    default_message = "Payment required to execute swap"


class RateLimitExceededError(_CodedError):
    code_value = ErrorCode.RATE_LIMIT_EXCEEDED
    default_message = "Rate limit exceeded"


class NetworkError(_CodedError):
    """Transport failure with no structured server response."""

    code_value = ErrorCode.NETWORK_ERROR
    default_message = "Network request failed"


class TimeoutExceededError(_CodedError):
    """A client-enforced deadline expired."""

    code_value = ErrorCode.TIMEOUT
    default_message = "Request timed out"


class ValidationError(ClawSwapError, ValueError):
    """Request rejected locally before any network call."""

    default_message = "Invalid request"

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(ErrorCode.INVALID_REQUEST, message, details={"field": field})


class UnclassifiedResponseError(ClawSwapError):
    """Execute response is neither EVM-source nor Solana-source."""

    default_message = "Execute response carries neither or both transaction shapes"

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(
            ErrorCode.UNCLASSIFIED_RESPONSE,
            message,
            suggestion="Do not sign anything; re-check the swap status or contact support",
            details=details,
        )


ERROR_CLASSES: dict[str, type[_CodedError]] = {
    cls.code_value.value: cls
    for cls in (
        MissingFieldError,
        UnsupportedChainError,
        UnsupportedRouteError,
        QuoteFailedError,
        InsufficientLiquidityError,
        AmountTooLowError,
        AmountTooHighError,
        GasExceedsThresholdError,
        RelayUnavailableError,
        PaymentRequiredError,
        RateLimitExceededError,
        NetworkError,
        TimeoutExceededError,
    )
}


def _extract_envelope(body: Any) -> dict:
    """Pull the error object out of a v2, legacy flat, or string envelope."""
    if not isinstance(body, dict):
        return {}

    error = body.get("error")
    if isinstance(error, dict):
        return error
    if isinstance(error, str):
        return {"message": error}

    # Legacy flat envelope: {"code": ..., "message": ...}
    if "code" in body or "message" in body:
        return body
    return {}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def _status_fallback(status_code: int) -> type[_CodedError]:
    if status_code == 402:
        return PaymentRequiredError
    if status_code == 404:
        return UnsupportedRouteError
    if status_code == 429:
        return RateLimitExceededError
    if status_code >= 500:
        return RelayUnavailableError
    return NetworkError


def map_api_error(status_code: int, body: Any = None) -> ClawSwapError:
    """Map an HTTP status and error body to a typed error.

    Order: a recognized code wins; an unrecognized code is preserved on a
    generic ``ClawSwapError``; with no code the HTTP status decides.
    Never raises, whatever ``body`` is.
    """
    envelope = _extract_envelope(body)
    code = _text(envelope.get("code"))
    message = _text(envelope.get("message"))
    suggestion = _text(envelope.get("suggestion"))
    details = envelope.get("details")
    if not isinstance(details, dict):
        details = None

    if code:
        error_class = ERROR_CLASSES.get(code)
        if error_class is not None:
            return error_class(message, suggestion, details)
        logger.debug(f"Unrecognized error code from server: {code} (HTTP {status_code})")
        return ClawSwapError(code, message, suggestion, details)

    error_class = _status_fallback(status_code)
    if error_class is NetworkError and message is None:
        message = "Unknown error occurred"
    return error_class(message, suggestion, details)
