"""Retry with exponential backoff for GitHub rate limiting.

Only one failure class is transient: a 403 response whose message mentions a
rate limit (primary or secondary). Every other error, including other 403s,
is re-raised on the first occurrence.

Delay calculation: base_delay * 2 ** (attempt - 1), so with the defaults the
waits between the three attempts are 1s and 2s.
"""

import logging
from typing import TypeVar
from collections.abc import Callable

from board_sync.core.errors import GitHubAPIError
from board_sync.core.time.abc import Time

T = TypeVar("T")

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0
RATE_LIMIT_STATUS = 403


def is_rate_limit_error(error: BaseException) -> bool:
    """Return True for the transient rate-limit signal."""
    if not isinstance(error, GitHubAPIError):
        return False
    return error.status == RATE_LIMIT_STATUS and "rate limit" in error.message.lower()


def with_retry(
    operation: Callable[[], T],
    label: str,
    *,
    time: Time,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay: float = BASE_DELAY_SECONDS,
) -> T:
    """Call operation, retrying on rate limiting.

    Args:
        operation: Zero-argument callable performing one remote call
        label: Name of the call used in log messages
        time: Time implementation used for backoff sleeps
        max_attempts: Total attempts including the first (default: 3)
        base_delay: Delay before the second attempt in seconds (default: 1.0)

    Returns:
        Whatever operation returns

    Raises:
        GitHubAPIError: The last rate-limit error once attempts are exhausted,
            or any non-rate-limit error immediately
    """
    delay = base_delay
    attempt = 0
    while True:
        attempt += 1
        try:
            return operation()
        except GitHubAPIError as e:
            if not is_rate_limit_error(e) or attempt >= max_attempts:
                raise
            logger.warning(
                "%s hit rate limit. Retrying in %.1fs (attempt %d/%d)",
                label,
                delay,
                attempt,
                max_attempts,
            )
            time.sleep(delay)
            delay *= 2
