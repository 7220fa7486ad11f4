"""
Clocks

Expiry is evaluated lazily by comparing the clock to a stored deadline,
so every time-dependent read goes through one of these.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current time in whole UNIX seconds."""

    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """
    Clock that only moves when told to.

    Usage:
        clock = ManualClock(1_700_000_000)
        clock.advance(90 * 24 * 60 * 60)
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"Clock cannot start before the epoch, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        """Move forward by seconds and return the new time."""
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards, got {seconds}")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(f"Clock cannot move backwards from {self._now} to {timestamp}")
        self._now = timestamp
