"""Free-transfer tracking between boardings."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from fare_card.windows import TRANSFER_WINDOW, ServiceWindow, in_window


@dataclass
class TransferTracker:
    """Reference point for deciding whether the next boarding is a transfer.

    A boarding is a free transfer when the previous boarding was on a
    different route (case-insensitive), no more than ``max_gap`` ago, and the
    current moment is inside the transfer window.
    """

    max_gap: timedelta = timedelta(hours=1)
    window: ServiceWindow = TRANSFER_WINDOW
    last_boarding_at: datetime | None = None
    last_route_id: str | None = None

    def is_eligible(self, now: datetime, route_id: str) -> bool:
        if self.last_boarding_at is None or not self.last_route_id:
            return False
        if self.last_route_id.casefold() == route_id.casefold():
            return False
        if now - self.last_boarding_at > self.max_gap:
            return False
        return in_window(now, self.window)

    def record(self, now: datetime, route_id: str) -> None:
        self.last_boarding_at = now
        self.last_route_id = route_id
