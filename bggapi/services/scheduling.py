"""Clock, timer and cancellation primitives used by the retry loop."""

import asyncio
import time
from typing import Protocol


class Scheduler(Protocol):
    """Source of time and deferred wake-ups for retries."""

    def now(self) -> float:
        """Current time in seconds."""
        ...

    async def sleep(self, delay: float) -> None:
        """Suspend the calling task for ``delay`` seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by the monotonic clock and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, delay: float) -> None:
        await asyncio.sleep(delay)


class CancellationToken:
    """Lets a caller stop a request that is waiting to retry.

    Cancelling never interrupts an HTTP call already in flight. The request
    stops at its next retry point instead.
    """

    def __init__(self) -> None:
        self._cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
