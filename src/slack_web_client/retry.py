"""Retry driver that runs one logical request under a RetryPolicy."""

from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Optional, TypeVar

from .retry_policies import RetryPolicy

T = TypeVar("T")

FailedAttemptHook = Callable[[BaseException, int, int], None]


class AbortRetry(Exception):
    """Raised by a task to stop retrying. The wrapped error is what the caller sees."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(str(error))
        self.error = error


async def retry_call(
    task: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    on_failed_attempt: Optional[FailedAttemptHook] = None,
    rng: Optional[random.Random] = None,
) -> T:
    attempt = 0
    while True:
        attempt += 1
        try:
            return await task()
        except AbortRetry as abort:
            raise abort.error
        except Exception as exc:
            retries_left = policy.max_attempts - attempt
            if on_failed_attempt is not None:
                on_failed_attempt(exc, attempt, retries_left)
            if retries_left <= 0:
                raise
            await asyncio.sleep(policy.delay_for(attempt, rng))


__all__ = ["AbortRetry", "retry_call"]
