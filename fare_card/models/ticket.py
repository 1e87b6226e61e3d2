"""Ticket models issued after a successful boarding or bike checkout."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from fare_card.models.enums import RouteKind
from fare_card.serialization import record_to_dict


@dataclass(frozen=True)
class Ticket:
    """Record of one completed vehicle boarding."""

    card_id: str
    route_id: str
    route_kind: RouteKind
    timestamp: datetime
    policy_label: str
    amount_charged: Decimal  # what the ledger actually debited
    base_fare: Decimal
    balance_after: Decimal
    is_transfer: bool
    total_amount_paid: Decimal

    def to_dict(self) -> dict:
        return record_to_dict(self)


@dataclass(frozen=True)
class BikeTicket:
    """Record of one bike checkout."""

    card_id: str
    timestamp: datetime
    policy_label: str
    amount_paid: Decimal
    daily_rate: Decimal
    fines_applied: int
    balance_after: Decimal

    @property
    def had_fines(self) -> bool:
        return self.fines_applied > 0

    def to_dict(self) -> dict:
        return record_to_dict(self)
