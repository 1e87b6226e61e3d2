"""Tests for CardAccount fare policies and counters."""

from datetime import datetime
from decimal import Decimal

import pytest

from fare_card.card import CardAccount
from fare_card.clock import ManualClock
from fare_card.exceptions import UnsupportedPolicyError
from fare_card.models.enums import FarePolicy

URBAN = Decimal("1580")


class TestConstruction:
    """Card identity and policy."""

    def test_ids_are_unique(self, make_card) -> None:
        assert make_card().id != make_card().id

    def test_explicit_id(self, clock: ManualClock) -> None:
        card = CardAccount(card_id="card-test-001", clock=clock)
        assert card.id == "card-test-001"

    def test_policy_from_string(self, clock: ManualClock) -> None:
        card = CardAccount(policy="HALF_FARE", clock=clock)
        assert card.policy is FarePolicy.HALF_FARE
        assert card.policy_label == "Half Fare"

    def test_unknown_policy_rejected(self, clock: ManualClock) -> None:
        with pytest.raises(UnsupportedPolicyError):
            CardAccount(policy="NIGHT_OWL", clock=clock)

    def test_starts_empty(self, make_card) -> None:
        card = make_card()
        assert card.balance == 0
        assert card.pending_credit == 0
        assert card.monthly_trip_count == 0


class TestStandard:
    """Standard cards pay the amount they are asked to."""

    def test_negative_amounts_rejected(self, make_card) -> None:
        card = make_card(top_up=30000)
        card.top_up(25000)

        assert card.debit(Decimal("-5000")) is False
        assert card.pay(Decimal("-5000"), URBAN) is False
        assert card.balance == Decimal("55000")

    def test_pay_debits_amount(self, make_card) -> None:
        card = make_card(top_up=2000)
        assert card.pay(URBAN, URBAN) is True
        assert card.balance == Decimal("420")

    def test_insufficient_funds(self, make_card) -> None:
        card = make_card()
        assert card.pay(URBAN, URBAN) is False
        assert card.balance == 0

    def test_standard_does_not_count_trips(self, make_card) -> None:
        card = make_card(top_up=5000)
        card.pay(URBAN, URBAN)
        assert card.monthly_trip_count == 0


class TestHalfFare:
    """Half-fare cooldown and daily limit."""

    def test_two_discounted_then_full(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)
        due = card.amount_due(URBAN)
        assert due == Decimal("790")

        assert card.pay(due, URBAN)
        clock.advance(minutes=6)
        assert card.pay(due, URBAN)
        clock.advance(minutes=6)
        assert card.pay(due, URBAN)

        assert card.balance == Decimal("5000") - 790 - 790 - 1580
        assert card.daily_policy_trip_count == 2

    def test_cooldown_rejects_without_change(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)
        assert card.pay(Decimal("790"), URBAN)
        clock.advance(minutes=4, seconds=59)

        assert card.pay(Decimal("790"), URBAN) is False
        assert card.balance == Decimal("4210")
        assert card.daily_policy_trip_count == 1

    def test_cooldown_ends_at_five_minutes(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)
        card.pay(Decimal("790"), URBAN)
        clock.advance(minutes=5)
        assert card.pay(Decimal("790"), URBAN) is True

    def test_daily_counter_resets_next_day(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE, top_up=10000)
        card.pay(Decimal("790"), URBAN)
        clock.advance(minutes=10)
        card.pay(Decimal("790"), URBAN)

        clock.advance(days=1)
        assert card.daily_policy_trip_count == 0
        assert card.pay(Decimal("790"), URBAN)
        assert card.balance == Decimal("10000") - 790 * 3
        assert card.daily_policy_trip_count == 1

    def test_full_fare_outside_window(self, make_card, clock: ManualClock) -> None:
        clock.set(datetime(2024, 5, 6, 22, 0))
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)

        assert card.pay(Decimal("790"), URBAN)
        assert card.balance == Decimal("3420")
        assert card.daily_policy_trip_count == 0

    def test_full_fare_on_weekend(self, make_card, clock: ManualClock) -> None:
        clock.set(datetime(2024, 5, 11, 10, 0))  # Saturday
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)

        assert card.pay(Decimal("790"), URBAN)
        assert card.balance == Decimal("3420")

    def test_rejected_debit_keeps_slot(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE)
        assert card.pay(Decimal("790"), URBAN)  # -790
        clock.advance(minutes=6)

        assert card.pay(Decimal("790"), URBAN) is False  # -1580 breaches the floor
        assert card.balance == Decimal("-790")
        assert card.daily_policy_trip_count == 1

    def test_transfer_skips_cooldown_and_counter(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.HALF_FARE, top_up=5000)
        card.pay(Decimal("790"), URBAN)
        clock.advance(minutes=2)

        assert card.pay(Decimal("0"), URBAN, transfer=True) is True
        assert card.balance == Decimal("4210")
        assert card.daily_policy_trip_count == 1


class TestFreeFare:
    """Free fare: two free trips a day inside the window, no cooldown."""

    def test_two_free_then_full(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.FREE_FARE, top_up=5000)
        assert card.amount_due(URBAN) == 0

        assert card.pay(0, URBAN)
        clock.advance(minutes=1)
        assert card.pay(0, URBAN)
        clock.advance(minutes=1)
        assert card.pay(0, URBAN)

        assert card.balance == Decimal("3420")

    def test_daily_counter_resets_next_day(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.FREE_FARE, top_up=5000)
        card.pay(0, URBAN)
        clock.advance(minutes=1)
        card.pay(0, URBAN)
        assert card.daily_policy_trip_count == 2

        clock.advance(days=1)
        assert card.daily_policy_trip_count == 0
        assert card.pay(0, URBAN)
        assert card.balance == Decimal("5000")
        assert card.daily_policy_trip_count == 1

    def test_full_fare_before_six(self, make_card, clock: ManualClock) -> None:
        clock.set(datetime(2024, 5, 6, 5, 59, 59))
        card = make_card(FarePolicy.FREE_FARE, top_up=5000)
        assert card.pay(0, URBAN)
        assert card.balance == Decimal("3420")

    def test_free_at_six_sharp(self, make_card, clock: ManualClock) -> None:
        clock.set(datetime(2024, 5, 6, 6, 0))
        card = make_card(FarePolicy.FREE_FARE, top_up=5000)
        assert card.pay(0, URBAN)
        assert card.balance == Decimal("5000")

    def test_free_ride_with_negative_balance(self, make_card) -> None:
        card = make_card(FarePolicy.FREE_FARE)
        card.debit(1200)
        assert card.pay(0, URBAN) is True
        assert card.balance == Decimal("-1200")


class TestFullExemption:
    """Full exemption never debits."""

    def test_always_succeeds(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.FULL_EXEMPTION)
        for _ in range(10):
            assert card.amount_due(URBAN) == 0
            assert card.pay(0, URBAN) is True
            clock.advance(minutes=1)
        assert card.balance == 0
        assert card.daily_policy_trip_count == 0

    def test_station_debit_still_charges(self, make_card) -> None:
        card = make_card(FarePolicy.FULL_EXEMPTION, top_up=5000)
        assert card.debit(Decimal("1777.50")) is True
        assert card.balance == Decimal("3222.50")


class TestFrequentTraveler:
    """Monthly trip tiers."""

    def test_count_increments_on_success(self, make_card) -> None:
        card = make_card(FarePolicy.FREQUENT_TRAVELER, top_up=5000)
        card.pay(card.amount_due(URBAN), URBAN)
        assert card.monthly_trip_count == 1

    def test_failed_debit_not_counted(self, make_card) -> None:
        card = make_card(FarePolicy.FREQUENT_TRAVELER)
        card.debit(1000)
        assert card.pay(URBAN, URBAN) is False
        assert card.monthly_trip_count == 0

    def test_bike_debit_not_counted(self, make_card) -> None:
        card = make_card(FarePolicy.FREQUENT_TRAVELER, top_up=5000)
        card.debit(Decimal("1777.50"))
        assert card.monthly_trip_count == 0

    def test_month_rollover_resets(self, make_card, clock: ManualClock) -> None:
        clock.set(datetime(2024, 5, 1, 8, 0))
        card = make_card(FarePolicy.FREQUENT_TRAVELER)
        for _ in range(35):
            if card.balance < 2000:
                card.top_up(30000)
            card.pay(card.amount_due(URBAN), URBAN)
            clock.advance(minutes=30)
        assert card.monthly_trip_count == 35
        assert card.amount_due(URBAN) == Decimal("1264")

        clock.set(datetime(2024, 6, 1, 8, 0))
        assert card.monthly_trip_count == 0
        assert card.amount_due(URBAN) == URBAN
        assert card.pay(URBAN, URBAN)
        assert card.monthly_trip_count == 1

    def test_same_month_next_year_resets(self, make_card, clock: ManualClock) -> None:
        card = make_card(FarePolicy.FREQUENT_TRAVELER, top_up=5000)
        card.pay(URBAN, URBAN)
        clock.set(datetime(2025, 5, 6, 10, 0))
        assert card.monthly_trip_count == 0


class TestLabels:
    """Policy display labels."""

    @pytest.mark.parametrize(
        "policy,label",
        [
            (FarePolicy.STANDARD, "Standard"),
            (FarePolicy.HALF_FARE, "Half Fare"),
            (FarePolicy.FREE_FARE, "Free Fare"),
            (FarePolicy.FULL_EXEMPTION, "Full Exemption"),
            (FarePolicy.FREQUENT_TRAVELER, "Frequent Traveler"),
        ],
    )
    def test_label(self, make_card, policy: FarePolicy, label: str) -> None:
        assert make_card(policy).policy_label == label
