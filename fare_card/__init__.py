"""Contactless transit fare card: stored value, fare policies, transfers and bike rentals."""

from fare_card.bike import BikeFineState, BikeStation
from fare_card.card import CardAccount
from fare_card.clock import Clock, ManualClock, SystemClock
from fare_card.config import BikeConfig, FareCardConfig, FareConfig, LedgerConfig
from fare_card.exceptions import ConfigurationError, FareCardError, UnsupportedPolicyError
from fare_card.ledger import Ledger
from fare_card.models import BikeTicket, FarePolicy, RouteKind, Ticket
from fare_card.route import InterurbanRoute, Route
from fare_card.windows import FRANCHISE_WINDOW, TRANSFER_WINDOW, ServiceWindow, in_window

__version__ = "0.1.0"

__all__ = [
    "BikeConfig",
    "BikeFineState",
    "BikeStation",
    "BikeTicket",
    "CardAccount",
    "Clock",
    "ConfigurationError",
    "FRANCHISE_WINDOW",
    "FareCardConfig",
    "FareCardError",
    "FareConfig",
    "FarePolicy",
    "InterurbanRoute",
    "Ledger",
    "LedgerConfig",
    "ManualClock",
    "Route",
    "RouteKind",
    "ServiceWindow",
    "SystemClock",
    "TRANSFER_WINDOW",
    "Ticket",
    "UnsupportedPolicyError",
    "in_window",
]
