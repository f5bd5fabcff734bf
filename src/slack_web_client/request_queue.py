"""Bounded-concurrency FIFO queue for outbound HTTP exchanges."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Awaitable, Callable, Deque, TypeVar

T = TypeVar("T")


class RequestQueue:
    """Runs at most ``concurrency`` tasks at once, starting them in submission order.

    ``pause()`` only stops new tasks from starting; tasks already running are
    left alone. ``start()`` lets queued tasks start again.
    """

    def __init__(self, concurrency: int = 3) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._concurrency = concurrency
        self._waiters: Deque[asyncio.Future] = deque()
        self._running = 0
        self._paused = False

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def pending(self) -> int:
        """Tasks currently running."""
        return self._running

    @property
    def size(self) -> int:
        """Tasks waiting for a slot."""
        return sum(1 for waiter in self._waiters if not waiter.done())

    @property
    def is_paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        self._paused = True

    def start(self) -> None:
        self._paused = False
        self._wake()

    async def add(self, task: Callable[[], Awaitable[T]]) -> T:
        await self._acquire()
        try:
            return await task()
        finally:
            self._release()

    async def _acquire(self) -> None:
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        self._wake()
        try:
            await waiter
        except asyncio.CancelledError:
            # Cancelled after the slot was handed over: give it back.
            if waiter.done() and not waiter.cancelled():
                self._release()
            raise

    def _release(self) -> None:
        self._running -= 1
        self._wake()

    def _wake(self) -> None:
        while not self._paused and self._running < self._concurrency and self._waiters:
            waiter = self._waiters.popleft()
            if waiter.done():
                continue
            self._running += 1
            waiter.set_result(None)


__all__ = ["RequestQueue"]
