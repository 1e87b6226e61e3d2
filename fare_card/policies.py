"""Fare arithmetic for each fare policy.

These functions are pure: they take the base fare and the relevant counters
and return amounts. ``CardAccount`` owns the counters and decides when to
advance them.
"""

from decimal import ROUND_HALF_UP, Decimal

from fare_card.exceptions import UnsupportedPolicyError
from fare_card.models.enums import FarePolicy

CENT = Decimal("0.01")

# (first trip, last trip, multiplier); trips outside every band pay full fare
FREQUENT_TRAVELER_TIERS = (
    (30, 59, Decimal("0.80")),
    (60, 80, Decimal("0.75")),
)


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def frequent_traveler_multiplier(trip_number: int) -> Decimal:
    """Multiplier applied to the base fare for the ``trip_number``-th trip of the month."""
    for first, last, multiplier in FREQUENT_TRAVELER_TIERS:
        if first <= trip_number <= last:
            return multiplier
    return Decimal("1")


def amount_due(policy: FarePolicy, base_fare: Decimal, monthly_trip_count: int = 0) -> Decimal:
    """Nominal amount a card with ``policy`` owes for a boarding.

    Parameters
    ----------
    policy : FarePolicy
        Card's fare policy.
    base_fare : Decimal
        Undiscounted fare of the route.
    monthly_trip_count : int
        Trips already paid this month (frequent traveler only).

    Returns
    -------
    Decimal
        Amount before any transfer override or daily-limit fallback.
    """
    if policy is FarePolicy.STANDARD:
        return quantize(base_fare)
    elif policy is FarePolicy.HALF_FARE:
        return quantize(base_fare / 2)
    elif policy is FarePolicy.FREE_FARE:
        return Decimal("0")
    elif policy is FarePolicy.FULL_EXEMPTION:
        return Decimal("0")
    elif policy is FarePolicy.FREQUENT_TRAVELER:
        multiplier = frequent_traveler_multiplier(monthly_trip_count + 1)
        return quantize(base_fare * multiplier)
    raise UnsupportedPolicyError(f"Unknown fare policy: {policy!r}")


def discounted_charge(policy: FarePolicy, amount: Decimal, base_fare: Decimal, discounted: bool) -> Decimal:
    """Amount actually debited by a daily-limited policy.

    Inside the franchise window and under the daily limit, half fare pays the
    policy-adjusted ``amount`` and free fare pays nothing. Otherwise both pay
    the full base fare.
    """
    if not discounted:
        return quantize(base_fare)
    if policy is FarePolicy.HALF_FARE:
        return quantize(amount)
    elif policy is FarePolicy.FREE_FARE:
        return Decimal("0")
    raise UnsupportedPolicyError(f"{policy!r} has no daily discount")
