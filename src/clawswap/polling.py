"""Bounded polling for swap settlement.

``poll`` is generic: it repeats a fetch step until a continuation predicate
says stop or the time budget runs out. Polls are strictly sequential and
the loop suspends with ``asyncio.sleep`` between them.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Iterable
from typing import Callable, Optional, TypeVar

from clawswap.errors import TimeoutExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLL_TIMEOUT = 300.0  # 5 minutes, typical bridge settlement
DEFAULT_POLL_INTERVAL = 3.0

# The terminal set has changed between API revisions
TERMINAL_STATUSES_V2 = frozenset({"completed", "failed"})
TERMINAL_STATUSES_V1 = frozenset({"completed", "failed", "expired", "cancelled", "fulfilled"})

TERMINAL_STATUS_SETS = {
    "v1": TERMINAL_STATUSES_V1,
    "v2": TERMINAL_STATUSES_V2,
}


def terminal_statuses_for(protocol: str) -> frozenset[str]:
    """Terminal status set for a protocol revision ("v1" or "v2")."""
    try:
        return TERMINAL_STATUS_SETS[protocol.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown status protocol {protocol!r}; expected one of {sorted(TERMINAL_STATUS_SETS)}"
        ) from None


def is_terminal_status(status: str, terminal_statuses: Iterable[str] = TERMINAL_STATUSES_V2) -> bool:
    return status in terminal_statuses


async def poll(
    fetch_step: Callable[[], Awaitable[T]],
    should_continue: Callable[[T], bool],
    *,
    timeout: float = DEFAULT_POLL_TIMEOUT,
    interval: float = DEFAULT_POLL_INTERVAL,
    on_update: Optional[Callable[[T], None]] = None,
) -> T:
    """Poll ``fetch_step`` until ``should_continue`` returns False.

    The budget is checked before every fetch. ``on_update`` sees every
    fetched result, terminal or not, in order.

    Args:
        fetch_step: Coroutine function producing the next result
        should_continue: Predicate; False ends polling with that result
        timeout: Total budget in seconds
        interval: Seconds to sleep between fetches
        on_update: Optional synchronous observer

    Returns:
        The first result for which ``should_continue`` is False

    Raises:
        TimeoutExceededError: Budget exhausted before a final result
    """
    started = time.monotonic()
    attempt = 0

    while True:
        elapsed = time.monotonic() - started
        if elapsed > timeout:
            logger.warning(f"Polling timed out after {elapsed:.2f}s ({attempt} attempts)")
            raise TimeoutExceededError(
                "Polling timed out",
                suggestion="Increase timeout or check network connectivity",
                details={
                    "timeout_seconds": timeout,
                    "elapsed_seconds": round(elapsed, 3),
                    "attempts": attempt,
                },
            )

        attempt += 1
        result = await fetch_step()
        logger.debug(f"Poll attempt {attempt} returned after {time.monotonic() - started:.2f}s")

        if on_update is not None:
            on_update(result)

        if not should_continue(result):
            return result

        await asyncio.sleep(interval)
