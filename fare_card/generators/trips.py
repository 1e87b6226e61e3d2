"""Random trip plans for exercising a card over many days."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

from fare_card.config import DEFAULT_DENOMINATIONS
from fare_card.generators.base import BaseGenerator
from fare_card.models.enums import RouteKind, TripEventType
from fare_card.models.trip import TripEvent


class TripGenerator(BaseGenerator):
    """Generate a cardholder's top-ups and boardings in time order.

    Most steps are urban boardings on a small set of lines, so that both
    repeated lines and free transfers show up; gaps vary from a few minutes
    to most of a day.
    """

    EVENT_TYPES = [TripEventType.BOARDING, TripEventType.TOP_UP]
    EVENT_TYPE_WEIGHTS = [0.85, 0.15]

    ROUTE_KINDS = [RouteKind.URBAN, RouteKind.INTERURBAN]
    ROUTE_KIND_WEIGHTS = [0.9, 0.1]

    def __init__(
        self,
        seed: int | None = None,
        num_routes: int = 6,
        denominations: tuple[Decimal, ...] = DEFAULT_DENOMINATIONS,
    ) -> None:
        super().__init__(seed)
        self.denominations = denominations
        self.route_ids = [self.fake.unique.bothify("###?").upper() for _ in range(num_routes)]

    def generate(self, start: datetime, count: int) -> Iterator[TripEvent]:
        """Yield ``count`` events starting at ``start``.

        Parameters
        ----------
        start : datetime
            Timestamp of the first event.
        count : int
            Number of events to produce.

        Yields
        ------
        TripEvent
            Events with non-decreasing timestamps.
        """
        moment = start
        for _ in range(count):
            event_type = self.random.choices(
                self.EVENT_TYPES, weights=self.EVENT_TYPE_WEIGHTS, k=1
            )[0]
            if event_type == TripEventType.TOP_UP:
                yield TripEvent(
                    event_type=event_type,
                    timestamp=moment,
                    amount=self.random.choice(self.denominations),
                )
            else:
                yield TripEvent(
                    event_type=event_type,
                    timestamp=moment,
                    route_id=self.random.choice(self.route_ids),
                    route_kind=self.random.choices(
                        self.ROUTE_KINDS, weights=self.ROUTE_KIND_WEIGHTS, k=1
                    )[0],
                )
            moment += self._gap()

    def _gap(self) -> timedelta:
        """Time until the next event: usually minutes, sometimes hours."""
        if self.random.random() < 0.7:
            return timedelta(minutes=self.random.randint(1, 75))
        return timedelta(hours=self.random.randint(2, 20), minutes=self.random.randint(0, 59))
