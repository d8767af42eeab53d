"""
Bounded Retry Tests.

============================================================
PURPOSE
============================================================
Settlement rules of BoundedRetry.

TEST CATEGORIES:
- Success after failures
- Exhaustion surfaces the last failure unchanged
- Single attempt passes through
- Sequential attempts, shared settlement
- External deadline and cancelled awaiters
- Failing on_failure callbacks

============================================================
"""

import asyncio
import logging

import pytest

from core.retry import BoundedRetry, RetryAttempt, retry_call


class FlakyOperation:
    """Fails ``failures`` times, then returns ``value``."""

    def __init__(self, failures: int, value="ok"):
        self.failures = failures
        self.value = value
        self.calls = 0
        self.errors = []
        self.running = 0
        self.max_running = 0

    async def __call__(self):
        self.calls += 1
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await asyncio.sleep(0)
            if self.calls <= self.failures:
                error = ConnectionError(f"attempt {self.calls}")
                self.errors.append(error)
                raise error
            return self.value
        finally:
            self.running -= 1


# ============================================================
# SETTLEMENT
# ============================================================

class TestSettlement:
    """Tests for success and failure settlement."""

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self):
        operation = FlakyOperation(failures=2, value=42)
        retry = BoundedRetry(operation, max_attempts=3)

        assert await retry.result() == 42
        assert operation.calls == 3
        assert retry.attempts_made == 3

    @pytest.mark.asyncio
    async def test_exhaustion_raises_last_failure(self):
        operation = FlakyOperation(failures=10)
        retry = BoundedRetry(operation, max_attempts=2)

        with pytest.raises(ConnectionError) as exc_info:
            await retry.result()

        assert exc_info.value is operation.errors[-1]
        assert str(exc_info.value) == "attempt 2"
        assert operation.calls == 2

    @pytest.mark.asyncio
    async def test_single_attempt_passes_failure_through(self):
        operation = FlakyOperation(failures=1)

        with pytest.raises(ConnectionError) as exc_info:
            await BoundedRetry(operation, max_attempts=1).result()

        assert exc_info.value is operation.errors[0]
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_single_attempt_success(self):
        operation = FlakyOperation(failures=0, value="first")

        assert await BoundedRetry(operation, max_attempts=1).result() == "first"
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_first_success_stops_retrying(self):
        operation = FlakyOperation(failures=0)

        await BoundedRetry(operation, max_attempts=5).result()

        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_error_type_not_inspected(self):
        calls = []

        async def operation():
            calls.append(1)
            raise ValueError("not a transport error")

        with pytest.raises(ValueError):
            await BoundedRetry(operation, max_attempts=3).result()

        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_retry_call_helper(self):
        operation = FlakyOperation(failures=1, value="done")

        assert await retry_call(operation, max_attempts=2) == "done"
        assert operation.calls == 2

    def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError, match="max_attempts"):
            BoundedRetry(FlakyOperation(0), max_attempts=0)


# ============================================================
# SCHEDULING
# ============================================================

class TestScheduling:
    """Tests for sequencing and shared settlement."""

    @pytest.mark.asyncio
    async def test_attempts_are_sequential(self):
        operation = FlakyOperation(failures=3)

        await BoundedRetry(operation, max_attempts=4).result()

        assert operation.max_running == 1

    @pytest.mark.asyncio
    async def test_await_shares_one_run(self):
        operation = FlakyOperation(failures=1, value="shared")
        retry = BoundedRetry(operation, max_attempts=3)

        first, second = await asyncio.gather(retry.result(), retry)

        assert first == second == "shared"
        assert operation.calls == 2

    @pytest.mark.asyncio
    async def test_lazy_start(self):
        operation = FlakyOperation(failures=0)

        retry = BoundedRetry(operation, max_attempts=3)
        await asyncio.sleep(0)

        assert operation.calls == 0
        await retry
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_on_failure_receives_attempts(self):
        operation = FlakyOperation(failures=2)
        attempts = []

        await BoundedRetry(operation, max_attempts=3, on_failure=attempts.append).result()

        assert [a.ordinal for a in attempts] == [1, 2]
        assert [a.remaining for a in attempts] == [2, 1]
        assert all(isinstance(a, RetryAttempt) for a in attempts)
        assert attempts[0].error is operation.errors[0]

    @pytest.mark.asyncio
    async def test_cancelled_awaiter_leaves_others_waiting(self):
        release = asyncio.Event()
        calls = []

        async def operation():
            calls.append(1)
            await release.wait()
            return "v"

        retry = BoundedRetry(operation, max_attempts=3)
        patient = asyncio.ensure_future(retry.result())
        await asyncio.sleep(0)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(retry.result(), timeout=0.01)

        release.set()
        assert await patient == "v"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_raising_callback_keeps_retrying(self, caplog):
        operation = FlakyOperation(failures=2, value="recovered")

        def on_failure(attempt):
            raise RuntimeError("callback broke")

        with caplog.at_level(logging.ERROR, logger="core.retry"):
            result = await BoundedRetry(operation, max_attempts=3, on_failure=on_failure).result()

        assert result == "recovered"
        assert operation.calls == 3
        assert any("on_failure callback raised" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_raising_callback_keeps_last_failure(self):
        operation = FlakyOperation(failures=5)

        def on_failure(attempt):
            raise RuntimeError("callback broke")

        with pytest.raises(ConnectionError) as exc_info:
            await BoundedRetry(operation, max_attempts=2, on_failure=on_failure).result()

        assert exc_info.value is operation.errors[-1]

    @pytest.mark.asyncio
    async def test_external_deadline_cancels(self):
        calls = []
        cancelled = []

        async def slow():
            calls.append(1)
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(1)
                raise

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(BoundedRetry(slow, max_attempts=3).result(), timeout=0.05)

        for _ in range(3):
            await asyncio.sleep(0)
        assert len(calls) == 1
        assert cancelled == [1]


# ============================================================
# LOGGING
# ============================================================

class TestLogging:
    """Tests for retry log records."""

    @pytest.mark.asyncio
    async def test_logs_retries_and_exhaustion(self, caplog):
        operation = FlakyOperation(failures=5)

        with caplog.at_level(logging.WARNING, logger="core.retry"):
            with pytest.raises(ConnectionError):
                await BoundedRetry(operation, max_attempts=2, name="depth").result()

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(warnings) == 1
        assert "[depth] Attempt 1/2 failed" in warnings[0].getMessage()
        assert len(errors) == 1
        assert "Exhausted 2 attempts" in errors[0].getMessage()
