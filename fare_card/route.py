"""Vehicles that charge a card for a boarding and issue a ticket."""

from __future__ import annotations

import logging
import threading
from decimal import Decimal

from fare_card.card import CardAccount
from fare_card.clock import Clock, SystemClock
from fare_card.config import FareCardConfig, get_config
from fare_card.models.enums import RouteKind
from fare_card.models.ticket import Ticket

logger = logging.getLogger(__name__)


class Route:
    """An urban bus line.

    Parameters
    ----------
    route_id : str
        Line identifier; compared case-insensitively for transfers.
    clock : Clock | None
        Time source; defaults to the system clock.
    config : FareCardConfig | None
        Fare configuration; defaults to the process-wide config.
    """

    kind = RouteKind.URBAN

    def __init__(
        self,
        route_id: str,
        clock: Clock | None = None,
        config: FareCardConfig | None = None,
    ) -> None:
        self.route_id = route_id
        self.clock = clock or SystemClock()
        self.config = config or get_config()
        self.last_ticket: Ticket | None = None
        self._ticket_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.route_id!r})"

    def _set_last_ticket(self, ticket: Ticket | None) -> None:
        with self._ticket_lock:
            self.last_ticket = ticket

    @property
    def base_fare(self) -> Decimal:
        return self.config.fares.urban_base_fare

    def charge_card(self, card: CardAccount) -> Ticket | None:
        """Board ``card`` on this route.

        A free transfer outranks whatever the card's fare policy would
        charge. On rejection nothing on the card changes and ``None`` is
        returned.
        """
        base_fare = self.base_fare

        with card.lock:
            now = self.clock.now()
            due = card.amount_due(base_fare)
            is_transfer = card.is_transfer_eligible(now, self.route_id)
            due_final = Decimal("0") if is_transfer else due

            funds_before = card.total_funds
            if not card.pay(due_final, base_fare, transfer=is_transfer):
                self._set_last_ticket(None)
                logger.info("No ticket on %s for card %s", self.route_id, card.id)
                return None

            charged = funds_before - card.total_funds
            card.record_transfer(now, self.route_id)

            ticket = Ticket(
                card_id=card.id,
                route_id=self.route_id,
                route_kind=self.kind,
                timestamp=now,
                policy_label=card.policy_label,
                amount_charged=charged,
                base_fare=base_fare,
                balance_after=card.balance,
                is_transfer=is_transfer,
                total_amount_paid=charged,
            )
            self._set_last_ticket(ticket)

        logger.info(
            "Card %s boarded %s: charged %s%s",
            card.id,
            self.route_id,
            charged,
            " (transfer)" if is_transfer else "",
            extra={"ticket": ticket.to_dict()},
        )
        return ticket


class InterurbanRoute(Route):
    """A bus line running between towns, at the interurban base fare."""

    kind = RouteKind.INTERURBAN

    @property
    def base_fare(self) -> Decimal:
        return self.config.fares.interurban_base_fare
