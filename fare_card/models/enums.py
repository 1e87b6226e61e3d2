"""Enumeration types for fare-card entities."""

from enum import Enum


class FarePolicy(str, Enum):
    STANDARD = "STANDARD"
    HALF_FARE = "HALF_FARE"
    FREE_FARE = "FREE_FARE"
    FULL_EXEMPTION = "FULL_EXEMPTION"
    FREQUENT_TRAVELER = "FREQUENT_TRAVELER"

    @property
    def label(self) -> str:
        """Display string printed on tickets."""
        return POLICY_LABELS[self]


POLICY_LABELS = {
    FarePolicy.STANDARD: "Standard",
    FarePolicy.HALF_FARE: "Half Fare",
    FarePolicy.FREE_FARE: "Free Fare",
    FarePolicy.FULL_EXEMPTION: "Full Exemption",
    FarePolicy.FREQUENT_TRAVELER: "Frequent Traveler",
}


class RouteKind(str, Enum):
    URBAN = "URBAN"
    INTERURBAN = "INTERURBAN"


class TripEventType(str, Enum):
    TOP_UP = "TOP_UP"
    BOARDING = "BOARDING"
