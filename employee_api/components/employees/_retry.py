"""
Retry policy for upstream calls.

Key behaviors:
- Only rate-limited responses (RateLimited) are retried
- Delay grows exponentially from initial_delay and saturates at max_delay
- max_attempts caps the total number of calls, including the first one
- Exhaustion raises RateLimitExhausted chained to the last rate-limit failure
- Waits go through an awaitable sleep so no thread is held while backing off
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from .models import RateLimited, RateLimitExhausted
from .ports import SleepFn

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff (delays in seconds)."""

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 5.0
    multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")


DEFAULT_POLICY = RetryPolicy()


def calculate_backoff(attempt: int, policy: RetryPolicy = DEFAULT_POLICY) -> float:
    """
    Delay before the retry that follows a failed attempt.

    Args:
        attempt: Zero-based index of the attempt that was rate limited
        policy: Retry policy

    Returns min(max_delay, initial_delay * multiplier ** attempt).
    """
    if attempt < 0:
        raise ValueError("attempt must be non-negative")
    try:
        delay = policy.initial_delay * (policy.multiplier**attempt)
    except OverflowError:
        return policy.max_delay
    return min(policy.max_delay, delay)


def should_retry(attempt: int, policy: RetryPolicy = DEFAULT_POLICY) -> bool:
    """True if another call is allowed after the zero-based attempt failed."""
    return attempt + 1 < policy.max_attempts


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_POLICY,
    sleep: SleepFn = asyncio.sleep,
    description: str = "upstream call",
) -> T:
    """
    Run operation, retrying on RateLimited according to policy.

    Any other exception propagates immediately.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except RateLimited as exc:
            if not should_retry(attempt, policy):
                logger.error(
                    "Rate limited on %s, giving up after %d attempts",
                    description,
                    policy.max_attempts,
                )
                raise RateLimitExhausted(policy.max_attempts) from exc

            delay = calculate_backoff(attempt, policy)
            logger.warning(
                "Rate limited, retry attempt %d of %d for %s in %.3fs",
                attempt + 1,
                policy.max_attempts - 1,
                description,
                delay,
            )
            await sleep(delay)
            attempt += 1
