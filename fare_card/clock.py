"""Time sources for fare resolution.

Every time-dependent rule reads the current moment through a ``Clock`` so
that boardings can be replayed deterministically.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current local time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the host's local time."""

    def now(self) -> datetime:
        return datetime.now()


class ManualClock:
    """Clock that only moves when told to.

    Parameters
    ----------
    start : datetime
        Initial reading.
    """

    def __init__(self, start: datetime) -> None:
        self._now = start

    def now(self) -> datetime:
        return self._now

    def set(self, moment: datetime) -> None:
        """Jump to an absolute moment."""
        self._now = moment

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by a ``timedelta`` built from ``kwargs``.

        ``clock.advance(minutes=6)`` returns the new reading.
        """
        self._now = self._now + timedelta(**kwargs)
        return self._now
