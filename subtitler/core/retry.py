"""
Bounded retry with deterministic exponential backoff.
"""

import logging
import time
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_with_backoff(operation: Callable[[], T],
                       max_attempts: int = 3,
                       base_delay: float = 1.0,
                       should_retry: Callable[[BaseException], bool] | None = None,
                       sleep: Callable[[float], None] = time.sleep) -> T:
    """
    Call `operation` up to `max_attempts` times.

    After failed attempt i (0-based) the wait is base_delay * 2**i, so a
    3-attempt run that fails twice sleeps 1x then 2x the base. No jitter.
    `should_retry` can veto a retry for a given exception; the last
    exception is re-raised unchanged once attempts are exhausted.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt in range(max_attempts):
        try:
            return operation()
        except Exception as e:
            if attempt == max_attempts - 1:
                raise
            if should_retry is not None and not should_retry(e):
                raise
            delay = base_delay * (2 ** attempt)
            logger.warning("Retry attempt %d/%d after %.1fs: %s",
                           attempt + 1, max_attempts - 1, delay, e)
            sleep(delay)

    # Unreachable: the loop either returns or raises
    raise RuntimeError("retry loop exited without result")
