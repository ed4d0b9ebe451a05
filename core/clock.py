"""
Clock

Time source injected into the compiler and the gatherers. Run
identifiers and capture times come from here, so tests can freeze it.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    """
    Protocol for time source.

    Can be real time or frozen for deterministic testing.
    """
    def now(self) -> datetime:
        """Get current UTC time."""
        ...


class RealClock:
    """Real-time clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Frozen clock for deterministic testing.

    Always returns the same time until moved with set_time/advance.
    """

    def __init__(self, frozen_time: Optional[datetime] = None) -> None:
        self._time = frozen_time or datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, time: datetime) -> None:
        """Set the frozen time."""
        self._time = time

    def advance(self, **delta: float) -> None:
        """Move the frozen time forward, e.g. ``clock.advance(milliseconds=1)``."""
        self._time = self._time + timedelta(**delta)
