"""
Tests for the upstream retry policy.

Key behaviors:
- Backoff grows exponentially and saturates at max_delay
- Only rate-limited failures are retried
- max_attempts caps the total number of calls
"""

from __future__ import annotations

import asyncio

import pytest

from employee_api.components.employees import (
    NetworkError,
    RateLimited,
    RateLimitExhausted,
    RetryPolicy,
    UpstreamError,
    calculate_backoff,
    call_with_retry,
    should_retry,
)

POLICY = RetryPolicy(max_attempts=3, initial_delay=1.0, max_delay=5.0, multiplier=2.0)


class ScriptedOperation:
    """Raises or returns the scripted outcomes in order, counting calls."""

    def __init__(self, *outcomes: object) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self) -> object:
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# --- Backoff Tests ---


class TestCalculateBackoff:
    """Test delay computation."""

    def test_exponential_growth(self) -> None:
        assert calculate_backoff(0, POLICY) == 1.0
        assert calculate_backoff(1, POLICY) == 2.0
        assert calculate_backoff(2, POLICY) == 4.0

    def test_saturates_at_max_delay(self) -> None:
        assert calculate_backoff(3, POLICY) == 5.0
        assert calculate_backoff(50, POLICY) == 5.0

    def test_huge_attempt_does_not_overflow(self) -> None:
        assert calculate_backoff(10_000, POLICY) == 5.0

    def test_multiplier_of_one_is_constant(self) -> None:
        flat = RetryPolicy(max_attempts=5, initial_delay=0.5, max_delay=5.0, multiplier=1.0)

        assert [calculate_backoff(i, flat) for i in range(4)] == [0.5, 0.5, 0.5, 0.5]

    def test_negative_attempt_rejected(self) -> None:
        with pytest.raises(ValueError):
            calculate_backoff(-1, POLICY)


class TestShouldRetry:
    def test_attempts_remaining(self) -> None:
        assert should_retry(0, POLICY) is True
        assert should_retry(1, POLICY) is True
        assert should_retry(2, POLICY) is False

    def test_single_attempt_never_retries(self) -> None:
        assert should_retry(0, RetryPolicy(max_attempts=1)) is False


class TestRetryPolicyValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_attempts": 0},
            {"initial_delay": -1.0},
            {"max_delay": -1.0},
            {"multiplier": 0.5},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)  # type: ignore[arg-type]


# --- Retry Loop Tests ---


class TestCallWithRetry:
    """Test the retry loop."""

    def test_success_first_time(self) -> None:
        op = ScriptedOperation("ok")
        sleep = RecordingSleep()

        assert asyncio.run(call_with_retry(op, POLICY, sleep)) == "ok"
        assert op.calls == 1
        assert sleep.delays == []

    def test_two_rate_limits_then_success(self) -> None:
        """429, 429, 200 -> three calls and a result."""
        op = ScriptedOperation(RateLimited(), RateLimited(), "ok")
        sleep = RecordingSleep()

        assert asyncio.run(call_with_retry(op, POLICY, sleep)) == "ok"
        assert op.calls == 3
        assert sleep.delays == [1.0, 2.0]

    def test_exhaustion_after_max_attempts(self) -> None:
        """Three 429s with max_attempts=3 -> exhausted after exactly three calls."""
        last = RateLimited()
        op = ScriptedOperation(RateLimited(), RateLimited(), last)
        sleep = RecordingSleep()

        with pytest.raises(RateLimitExhausted) as exc_info:
            asyncio.run(call_with_retry(op, POLICY, sleep))

        assert op.calls == 3
        assert sleep.delays == [1.0, 2.0]
        assert exc_info.value.attempts == 3
        assert exc_info.value.__cause__ is last
        assert "Service unavailable after 3 retry attempts" in str(exc_info.value)

    def test_upstream_error_not_retried(self) -> None:
        op = ScriptedOperation(UpstreamError("boom", status_code=500), "ok")
        sleep = RecordingSleep()

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(call_with_retry(op, POLICY, sleep))

        assert exc_info.value.status_code == 500
        assert op.calls == 1
        assert sleep.delays == []

    def test_network_error_not_retried(self) -> None:
        op = ScriptedOperation(NetworkError("timed out"), "ok")

        with pytest.raises(NetworkError):
            asyncio.run(call_with_retry(op, POLICY, RecordingSleep()))

        assert op.calls == 1

    def test_rate_limit_then_other_error_propagates(self) -> None:
        op = ScriptedOperation(RateLimited(), UpstreamError("bad gateway", status_code=502))
        sleep = RecordingSleep()

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(call_with_retry(op, POLICY, sleep))

        assert not isinstance(exc_info.value, RateLimited)
        assert op.calls == 2
        assert sleep.delays == [1.0]

    def test_single_attempt_policy(self) -> None:
        op = ScriptedOperation(RateLimited())

        with pytest.raises(RateLimitExhausted):
            asyncio.run(call_with_retry(op, RetryPolicy(max_attempts=1), RecordingSleep()))

        assert op.calls == 1

    def test_cancellation_during_backoff_abandons_retries(self) -> None:
        """Cancelling the caller stops the pending wait and any further calls."""
        op = ScriptedOperation(RateLimited())
        slow = RetryPolicy(max_attempts=5, initial_delay=10.0, max_delay=10.0)

        async def scenario() -> asyncio.Task[object]:
            task = asyncio.create_task(call_with_retry(op, slow))
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return task

        task = asyncio.run(scenario())

        assert task.cancelled()
        assert op.calls == 1
