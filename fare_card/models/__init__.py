"""Domain models for fare-card."""

from fare_card.models.enums import POLICY_LABELS, FarePolicy, RouteKind, TripEventType
from fare_card.models.ticket import BikeTicket, Ticket
from fare_card.models.trip import TripEvent

__all__ = [
    "BikeTicket",
    "FarePolicy",
    "POLICY_LABELS",
    "RouteKind",
    "Ticket",
    "TripEvent",
    "TripEventType",
]
