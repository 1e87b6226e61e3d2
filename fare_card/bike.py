"""Bike-share station charging the same card balance as the buses."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from fare_card.card import CardAccount
from fare_card.clock import Clock, SystemClock
from fare_card.config import FareCardConfig, get_config
from fare_card.models.ticket import BikeTicket

logger = logging.getLogger(__name__)


@dataclass
class BikeFineState:
    """Per-card rental state kept by a station."""

    last_withdrawal_at: datetime | None = None  # set while a bike is out
    pending_fine_count: int = 0
    fine_history: list[datetime] = field(default_factory=list)


class BikeStation:
    """Rents bikes against a card's balance.

    Each checkout costs the daily rate plus one fine for every overage
    left unpaid from the previous rental. Fare policies do not apply here.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        config: FareCardConfig | None = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.config = config or get_config()
        self.last_ticket: BikeTicket | None = None
        self._states: dict[str, BikeFineState] = {}
        self._states_lock = threading.Lock()
        self._ticket_lock = threading.Lock()

    def _state(self, card: CardAccount) -> BikeFineState:
        with self._states_lock:
            return self._states.setdefault(card.id, BikeFineState())

    def _peek(self, card: CardAccount) -> BikeFineState:
        """Read-only view; cards the station has never seen get an empty state."""
        with self._states_lock:
            return self._states.get(card.id) or BikeFineState()

    def _set_last_ticket(self, ticket: BikeTicket | None) -> None:
        with self._ticket_lock:
            self.last_ticket = ticket

    def amount_due(self, card: CardAccount) -> Decimal:
        """Daily rate plus the fines pending for ``card``."""
        bike = self.config.bike
        return bike.daily_rate + self._peek(card).pending_fine_count * bike.fine_per_overage

    def fines_for(self, withdrawn_at: datetime, returned_at: datetime) -> int:
        """Number of fines for a rental between the two moments.

        Nothing is charged below ``free_minutes``; from there one fine accrues
        per full ``fine_period_minutes``, excluding the first period.
        """
        bike = self.config.bike
        elapsed_minutes = (returned_at - withdrawn_at).total_seconds() / 60
        if elapsed_minutes < bike.free_minutes:
            return 0
        return int(elapsed_minutes // bike.fine_period_minutes) - 1

    def check_out(self, card: CardAccount) -> bool:
        """Charge ``card`` and hand out a bike.

        Pending fines are cleared only when the charge goes through.
        """
        with card.lock:
            now = self.clock.now()
            fines = self._peek(card).pending_fine_count
            due = self.amount_due(card)

            if not card.debit(due):
                self._set_last_ticket(None)
                logger.info(
                    "Bike checkout rejected for card %s: %s due with %d pending fine(s)",
                    card.id,
                    due,
                    fines,
                )
                return False

            state = self._state(card)
            if state.last_withdrawal_at is not None:
                logger.warning("Card %s checked out again without returning a bike", card.id)

            state.pending_fine_count = 0
            state.last_withdrawal_at = now

            ticket = BikeTicket(
                card_id=card.id,
                timestamp=now,
                policy_label=card.policy_label,
                amount_paid=due,
                daily_rate=self.config.bike.daily_rate,
                fines_applied=fines,
                balance_after=card.balance,
            )
            self._set_last_ticket(ticket)

        logger.info(
            "Card %s checked out a bike for %s",
            card.id,
            due,
            extra={"ticket": ticket.to_dict()},
        )
        return True

    def check_in(self, card: CardAccount) -> None:
        """Record a bike returned by ``card``; late returns become pending fines."""
        with card.lock:
            state = self._peek(card)
            if state.last_withdrawal_at is None:
                logger.debug("Card %s returned a bike it never checked out", card.id)
                return

            now = self.clock.now()
            fines = self.fines_for(state.last_withdrawal_at, now)
            if fines > 0:
                state.pending_fine_count = fines
                state.fine_history.append(now)
                logger.info("Card %s returned late: %d fine(s) pending", card.id, fines)
            state.last_withdrawal_at = None

    def pending_fines(self, card: CardAccount) -> int:
        """Fines owed by ``card``, including those accruing on a bike still out."""
        state = self._peek(card)
        fines = state.pending_fine_count
        if state.last_withdrawal_at is not None:
            fines += self.fines_for(state.last_withdrawal_at, self.clock.now())
        return fines

    def fine_history(self, card: CardAccount) -> list[datetime]:
        """Return times at which ``card`` brought a bike back late."""
        return list(self._peek(card).fine_history)
