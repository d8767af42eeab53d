"""
Core Module - Bounded Retry.

============================================================
RESPONSIBILITY
============================================================
Turns a flaky asynchronous operation into one with an upper
bound on attempts and a deterministic settlement.

- Attempts are sequential, never concurrent
- No delay between attempts, no jitter
- Settles with the first successful value
- After the last failed attempt, re-raises that attempt's
  exception unchanged; earlier failures are dropped
- Every Exception counts as a failure; the error type is not
  inspected

============================================================
LIMITATIONS
============================================================
There is no intrinsic cancellation. Apply a deadline around
the whole call instead:

    await asyncio.wait_for(BoundedRetry(op, 3).result(), 10)

Cancelling the only awaiting task cancels the in-flight
attempt. While other tasks still await the run, it goes on
and they receive its settlement.

============================================================
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class RetryAttempt:
    """One failed attempt, handed to ``on_failure`` and then discarded."""

    ordinal: int
    max_attempts: int
    error: Exception

    @property
    def remaining(self) -> int:
        """Attempts left after this one."""
        return self.max_attempts - self.ordinal


class BoundedRetry(Generic[T]):
    """
    Retry wrapper around an operation factory.

    Each call of ``factory`` starts one attempt. The run starts
    on the first ``result()`` (or ``await``) and later awaits
    share its settlement.
    """

    def __init__(
        self,
        factory: Callable[[], Awaitable[T]],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        name: str = "operation",
        on_failure: Optional[Callable[[RetryAttempt], None]] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1 (got {max_attempts})")
        self._factory = factory
        self._max_attempts = max_attempts
        self._name = name
        self._on_failure = on_failure
        self._attempts_made = 0
        self._task: Optional["asyncio.Future[T]"] = None
        self._awaiters = 0

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def attempts_made(self) -> int:
        return self._attempts_made

    async def result(self) -> T:
        """
        Suspend until the wrapper settles; return the value or raise the last failure.

        Every awaiter waits on the shared run through a shield, so
        cancelling one awaiter leaves the others waiting. The run
        itself is cancelled only when its last awaiter is.
        """
        if self._task is None:
            self._task = asyncio.ensure_future(self._run())
        self._awaiters += 1
        try:
            return await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if self._awaiters == 1 and not self._task.done():
                self._task.cancel()
            raise
        finally:
            self._awaiters -= 1

    def __await__(self) -> Generator[Any, None, T]:
        return self.result().__await__()

    async def _run(self) -> T:
        for ordinal in range(1, self._max_attempts + 1):
            self._attempts_made = ordinal
            try:
                value = await self._factory()
            except Exception as e:
                attempt = RetryAttempt(ordinal, self._max_attempts, e)
                self._notify(attempt)
                if not attempt.remaining:
                    if self._max_attempts > 1:
                        logger.error(
                            f"[{self._name}] Exhausted {self._max_attempts} attempts, last error: {e}"
                        )
                    raise
                logger.warning(
                    f"[{self._name}] Attempt {ordinal}/{self._max_attempts} failed: {e}; "
                    f"retrying ({attempt.remaining} left)"
                )
                continue

            if ordinal > 1:
                logger.info(f"[{self._name}] Succeeded on attempt {ordinal}/{self._max_attempts}")
            return value

        raise RuntimeError(f"[{self._name}] retry loop ended without settling")

    def _notify(self, attempt: RetryAttempt) -> None:
        # Callback failures are logged and do not end the run.
        if self._on_failure is None:
            return
        try:
            self._on_failure(attempt)
        except Exception:
            logger.exception(f"[{self._name}] on_failure callback raised on attempt {attempt.ordinal}")


async def retry_call(
    factory: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    name: str = "operation",
) -> T:
    """Run ``factory`` under a fresh BoundedRetry and return its value."""
    return await BoundedRetry(factory, max_attempts, name).result()
