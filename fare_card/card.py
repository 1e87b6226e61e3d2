"""Card account: ledger, fare-policy counters and transfer state."""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import date, datetime
from decimal import Decimal

from fare_card.clock import Clock, SystemClock
from fare_card.config import FareCardConfig, get_config
from fare_card.exceptions import UnsupportedPolicyError
from fare_card.ledger import Ledger, to_amount
from fare_card.models.enums import FarePolicy
from fare_card.policies import amount_due, discounted_charge
from fare_card.transfer import TransferTracker
from fare_card.windows import in_window

logger = logging.getLogger(__name__)

DAILY_LIMITED_POLICIES = (FarePolicy.HALF_FARE, FarePolicy.FREE_FARE)


class CardAccount:
    """A contactless fare card.

    The card's fare policy is fixed at construction. Routes and bike
    stations go through ``amount_due``, ``pay``, ``debit`` and the transfer
    methods; they never touch the counters directly.

    Parameters
    ----------
    policy : FarePolicy
        Fare policy applied to every boarding.
    clock : Clock | None
        Time source; defaults to the system clock.
    config : FareCardConfig | None
        Limits, fares and windows; defaults to the process-wide config.
    card_id : str | None
        Identifier to use instead of a generated one.
    """

    def __init__(
        self,
        policy: FarePolicy = FarePolicy.STANDARD,
        clock: Clock | None = None,
        config: FareCardConfig | None = None,
        card_id: str | None = None,
    ) -> None:
        try:
            self.policy = FarePolicy(policy)
        except ValueError as exc:
            raise UnsupportedPolicyError(f"Unknown fare policy: {policy!r}") from exc

        self.id = card_id or uuid.uuid4().hex
        self.clock = clock or SystemClock()
        self.config = config or get_config()
        self.ledger = Ledger(self.config.ledger)
        self.transfers = TransferTracker(
            max_gap=self.config.fares.transfer_gap,
            window=self.config.fares.transfer_window,
        )
        # Held for a whole boarding or checkout by the orchestrators
        self.lock = threading.RLock()

        now = self.clock.now()
        self._monthly_trip_count = 0
        self._counted_month = now.month
        self._counted_year = now.year

        self._daily_policy_trip_count = 0
        self._last_policy_trip_date: date | None = None
        self._last_boarding_at: datetime | None = None

    def __repr__(self) -> str:
        return f"CardAccount(id={self.id!r}, policy={self.policy.value}, balance={self.balance})"

    @property
    def policy_label(self) -> str:
        return self.policy.label

    @property
    def balance(self) -> Decimal:
        return self.ledger.balance

    @property
    def pending_credit(self) -> Decimal:
        return self.ledger.pending_credit

    @property
    def total_funds(self) -> Decimal:
        return self.ledger.total_funds

    @property
    def monthly_trip_count(self) -> int:
        """Trips counted in the clock's current month."""
        return self._trips_this_month(self.clock.now())

    @property
    def daily_policy_trip_count(self) -> int:
        """Discounted trips taken on the clock's current date."""
        return self._policy_trips_on(self.clock.now().date())

    # Ledger

    def top_up(self, amount) -> bool:
        with self.lock:
            accepted = self.ledger.top_up(amount)
        if accepted:
            logger.info(
                "Card %s topped up %s (balance %s, pending %s)",
                self.id,
                amount,
                self.balance,
                self.pending_credit,
            )
        return accepted

    def accrue(self) -> None:
        with self.lock:
            self.ledger.accrue()

    def debit(self, amount) -> bool:
        """Plain ledger debit, bypassing the fare policy.

        Used by the bike station, whose rate is the same for every policy.
        Does not count as a trip.
        """
        with self.lock:
            return self.ledger.debit(amount)

    # Fare policy

    def amount_due(self, base_fare) -> Decimal:
        """Nominal amount this card owes for a boarding at ``base_fare``."""
        return amount_due(
            self.policy,
            to_amount(base_fare),
            monthly_trip_count=self.monthly_trip_count,
        )

    def pay(self, amount, base_fare, transfer: bool = False) -> bool:
        """Charge a boarding.

        ``amount`` is the policy-adjusted amount from ``amount_due``, or zero
        when the route has already found the boarding to be a free transfer.
        Half-fare and free-fare cards may fall back to ``base_fare`` once the
        daily discount is used up or outside the franchise window.

        Returns False, leaving the card untouched, if the ledger refuses the
        debit or a half-fare card boards again within the cooldown.
        """
        amount = to_amount(amount)
        base_fare = to_amount(base_fare)

        with self.lock:
            now = self.clock.now()

            if self.policy is FarePolicy.FULL_EXEMPTION:
                return True

            # Transfers skip cooldown and daily counters
            if transfer:
                return self._debit(now, amount)

            if self.policy in (FarePolicy.STANDARD, FarePolicy.FREQUENT_TRAVELER):
                return self._debit(now, amount)

            if self.policy is FarePolicy.HALF_FARE and self._in_cooldown(now):
                logger.info(
                    "Card %s rejected: boarded again within %s",
                    self.id,
                    self.config.fares.half_fare_cooldown,
                )
                return False

            if self.policy in DAILY_LIMITED_POLICIES:
                return self._pay_daily_limited(now, amount, base_fare)

            raise UnsupportedPolicyError(f"Unknown fare policy: {self.policy!r}")

    # Transfers

    def is_transfer_eligible(self, now: datetime, route_id: str) -> bool:
        return self.transfers.is_eligible(now, route_id)

    def record_transfer(self, now: datetime, route_id: str) -> None:
        with self.lock:
            self.transfers.record(now, route_id)

    # Internals

    def _debit(self, now: datetime, amount: Decimal) -> bool:
        if not self.ledger.debit(amount):
            logger.info(
                "Card %s rejected: %s would breach the floor (balance %s)",
                self.id,
                amount,
                self.balance,
            )
            return False
        self._roll_month(now)
        if self.policy is FarePolicy.FREQUENT_TRAVELER:
            self._monthly_trip_count += 1
        return True

    def _pay_daily_limited(self, now: datetime, amount: Decimal, base_fare: Decimal) -> bool:
        today = now.date()
        trips_today = self._policy_trips_on(today)
        discounted = (
            in_window(now, self.config.fares.franchise_window)
            and trips_today < self.config.fares.daily_discounted_trips
        )
        charge = discounted_charge(self.policy, amount, base_fare, discounted)

        if not self._debit(now, charge):
            return False

        self._last_policy_trip_date = today
        self._daily_policy_trip_count = trips_today + 1 if discounted else trips_today
        if self.policy is FarePolicy.HALF_FARE:
            self._last_boarding_at = now
        return True

    def _in_cooldown(self, now: datetime) -> bool:
        if self._last_boarding_at is None:
            return False
        return now - self._last_boarding_at < self.config.fares.half_fare_cooldown

    def _trips_this_month(self, now: datetime) -> int:
        if (now.month, now.year) != (self._counted_month, self._counted_year):
            return 0
        return self._monthly_trip_count

    def _roll_month(self, now: datetime) -> None:
        if (now.month, now.year) != (self._counted_month, self._counted_year):
            self._monthly_trip_count = 0
            self._counted_month = now.month
            self._counted_year = now.year

    def _policy_trips_on(self, today: date) -> int:
        if self._last_policy_trip_date != today:
            return 0
        return self._daily_policy_trip_count
