"""Day-of-week and time-of-day windows.

Two windows are in use: the franchise window, during which half-fare and
free-fare discounts apply, and the transfer window, during which a second
boarding on a different route can be free.
"""

from dataclasses import dataclass
from datetime import datetime, time

MONDAY_TO_FRIDAY = frozenset(range(0, 5))
MONDAY_TO_SATURDAY = frozenset(range(0, 6))


@dataclass(frozen=True)
class ServiceWindow:
    """Weekdays (``datetime.weekday()`` numbers) plus a half-open time range."""

    weekdays: frozenset[int]
    opens: time  # inclusive
    closes: time  # exclusive

    def contains(self, moment: datetime) -> bool:
        return in_window(moment, self)


FRANCHISE_WINDOW = ServiceWindow(MONDAY_TO_FRIDAY, time(6, 0), time(22, 0))
TRANSFER_WINDOW = ServiceWindow(MONDAY_TO_SATURDAY, time(7, 0), time(22, 0))


def in_window(moment: datetime, window: ServiceWindow) -> bool:
    """Return True if ``moment`` falls on an allowed weekday inside the hours."""
    if moment.weekday() not in window.weekdays:
        return False
    return window.opens <= moment.time() < window.closes
