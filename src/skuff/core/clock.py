"""Clock abstraction for stamping events.

WallClock: real wall-clock time (CLI)
FixedClock: deterministic time (tests)

Event factories never call datetime.now() directly; they take a clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that only moves when told to.

    Useful for tests that assert on ``created_at``.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, t: datetime) -> None:
        self._time = t

    def advance(self, seconds: float) -> None:
        """Advance time by *seconds*."""
        self._time = self._time + timedelta(seconds=seconds)
