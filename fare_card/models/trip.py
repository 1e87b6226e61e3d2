"""Trip plan events replayed against a card."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from fare_card.models.enums import RouteKind, TripEventType


@dataclass
class TripEvent:
    """One step of a cardholder's activity.

    ``amount`` is set for top-ups; ``route_id`` and ``route_kind`` for boardings.
    """

    event_type: TripEventType
    timestamp: datetime
    amount: Decimal | None = None
    route_id: str | None = None
    route_kind: RouteKind = RouteKind.URBAN
