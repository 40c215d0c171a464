"""
core.ratelimit — Pacing policies for sequential multi-step operations.

A rate limiter is handed to an orchestrator that issues several logical
operations against the database in one call (e.g. batch assignment).
Calling ``wait()`` before each operation guarantees that two consecutive
operations are at least ``interval`` seconds apart.

The clock and sleep functions are injectable so tests can run the
pacing logic without real delays::

    slept = []
    limiter = IntervalRateLimiter(0.1, clock=lambda: 0.0, sleep=slept.append)
"""

from __future__ import annotations

import time
from typing import Callable

from django.conf import settings

from core.constants import ASSIGNMENT_BATCH_INTERVAL_SECONDS


class IntervalRateLimiter:
    """
    Enforce a minimum interval between consecutive ``wait()`` returns.

    The first call returns immediately.  Later calls sleep for whatever
    remains of ``interval`` since the previous call returned.
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative.")
        self.interval = float(interval)
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    def wait(self) -> float:
        """Block until the next operation may run; return the seconds slept."""
        slept = 0.0
        if self._last is not None and self.interval > 0:
            remaining = self.interval - (self._clock() - self._last)
            if remaining > 0:
                self._sleep(remaining)
                slept = remaining
        self._last = self._clock()
        return slept

    def reset(self) -> None:
        self._last = None

    @classmethod
    def for_batch_assignment(cls) -> "IntervalRateLimiter":
        """Build the limiter configured for batch assignment."""
        interval = getattr(
            settings,
            "ASSIGNMENT_BATCH_INTERVAL_SECONDS",
            ASSIGNMENT_BATCH_INTERVAL_SECONDS,
        )
        return cls(interval)
