"""Execute-response discrimination.

The execute response has no tag field. A Solana-source response carries a
single base64 ``transaction``; an EVM-source response carries an ordered
``transactions`` list. Anything else is unclassified and must be rejected,
never guessed: signing a transaction with the wrong chain's key is the
failure this guards against.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from clawswap.errors import UnclassifiedResponseError
from clawswap.models import EvmTransaction, ExecuteSwapResponse

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    EVM = "evm"
    SOLANA = "solana"
    UNCLASSIFIED = "unclassified"


def _fields(response: Union[ExecuteSwapResponse, Mapping]) -> tuple[Any, Any]:
    if isinstance(response, ExecuteSwapResponse):
        return response.transaction, response.transactions
    if isinstance(response, Mapping):
        return response.get("transaction"), response.get("transactions")
    return None, None


def classify(response: Union[ExecuteSwapResponse, Mapping]) -> SourceKind:
    """Classify an execute response by which transaction field is populated."""
    transaction, transactions = _fields(response)

    has_single = isinstance(transaction, str) and len(transaction) > 0
    has_list = isinstance(transactions, (list, tuple)) and len(transactions) > 0
    single_absent = transaction is None or transaction == ""
    list_absent = transactions is None or (isinstance(transactions, (list, tuple)) and not transactions)

    if has_list and single_absent:
        return SourceKind.EVM
    if has_single and list_absent:
        return SourceKind.SOLANA
    return SourceKind.UNCLASSIFIED


def is_evm_source(response: Union[ExecuteSwapResponse, Mapping]) -> bool:
    return classify(response) is SourceKind.EVM


def is_solana_source(response: Union[ExecuteSwapResponse, Mapping]) -> bool:
    return classify(response) is SourceKind.SOLANA


def is_evm_transaction(value: Any) -> bool:
    """Check that a value looks like one EVM transaction to sign."""
    if isinstance(value, EvmTransaction):
        return True
    if not isinstance(value, Mapping):
        return False
    chain_id = value.get("chainId", value.get("chain_id"))
    return (
        isinstance(value.get("to"), str)
        and isinstance(value.get("data"), str)
        and value.get("value") is not None
        and chain_id is not None
    )


def require_classified(response: Union[ExecuteSwapResponse, Mapping]) -> SourceKind:
    """Classify, raising ``UnclassifiedResponseError`` instead of guessing."""
    kind = classify(response)
    if kind is SourceKind.UNCLASSIFIED:
        transaction, transactions = _fields(response)
        details = {
            "has_transaction": bool(transaction),
            "transaction_count": len(transactions) if isinstance(transactions, (list, tuple)) else 0,
        }
        logger.warning(f"Rejecting unclassified execute response: {details}")
        raise UnclassifiedResponseError(details=details)
    return kind
