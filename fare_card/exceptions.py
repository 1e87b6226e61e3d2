"""Custom exception hierarchy for fare-card.

Rejected fares, top-ups and checkouts are reported through return values.
These exceptions are reserved for misconfiguration and programming errors.
"""


class FareCardError(Exception):
    """Base exception for all fare-card errors."""


class ConfigurationError(FareCardError):
    """Raised when configuration is invalid or missing."""


class UnsupportedPolicyError(FareCardError):
    """Raised when a card carries a value outside the known fare policies."""
