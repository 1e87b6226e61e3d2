"""Stored-value ledger with a balance cap and pending credit."""

import logging
from decimal import Decimal, InvalidOperation

from fare_card.config import LedgerConfig

logger = logging.getLogger(__name__)


def to_amount(value) -> Decimal:
    """Coerce ints, floats and numeric strings to ``Decimal``."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Ledger:
    """Balance and pending credit for a single card.

    The balance never exceeds ``balance_cap``. Money loaded past the cap is
    held as pending credit and moved into the balance as soon as there is
    room. A debit may take the balance negative, down to ``negative_floor``.

    ``balance + pending_credit`` always equals everything loaded minus
    everything debited.
    """

    def __init__(self, config: LedgerConfig | None = None) -> None:
        self.config = config or LedgerConfig()
        self._balance = Decimal("0")
        self._pending = Decimal("0")

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def pending_credit(self) -> Decimal:
        return self._pending

    @property
    def total_funds(self) -> Decimal:
        return self._balance + self._pending

    def top_up(self, amount) -> bool:
        """Load ``amount`` onto the card.

        Only the configured denominations are accepted; anything else is
        rejected without touching the ledger. Whatever does not fit under
        the cap joins the pending credit.
        """
        try:
            amount = to_amount(amount)
            if not amount.is_finite():
                raise InvalidOperation
        except (InvalidOperation, ValueError, TypeError):
            logger.info("Rejected top-up of non-numeric amount %r", amount)
            return False

        if amount not in self.config.denominations:
            logger.info("Rejected top-up of %s: not an accepted denomination", amount)
            return False

        self.accrue()

        room = max(self.config.balance_cap - self._balance, Decimal("0"))
        credited = min(amount, room)
        self._balance += credited
        self._pending += amount - credited

        self.accrue()

        if credited < amount:
            logger.debug(
                "Top-up of %s hit the cap; %s held as pending credit",
                amount,
                amount - credited,
            )
        return True

    def accrue(self) -> None:
        """Move pending credit into the balance, up to the cap."""
        room = self.config.balance_cap - self._balance
        if self._pending > 0 and room > 0:
            moved = min(self._pending, room)
            self._balance += moved
            self._pending -= moved

    def can_debit(self, amount: Decimal) -> bool:
        return self._balance - amount >= self.config.negative_floor

    def debit(self, amount) -> bool:
        """Subtract ``amount`` unless that would breach the negative floor.

        Negative and non-finite amounts are rejected.
        """
        amount = to_amount(amount)
        if not amount.is_finite() or amount < 0:
            logger.info("Rejected debit of invalid amount %s", amount)
            return False
        self.accrue()
        if not self.can_debit(amount):
            logger.debug(
                "Debit of %s rejected: balance %s, floor %s",
                amount,
                self._balance,
                self.config.negative_floor,
            )
            return False
        self._balance -= amount
        self.accrue()
        return True
