"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from fare_card.card import CardAccount
from fare_card.clock import ManualClock
from fare_card.config import FareCardConfig
from fare_card.models.enums import FarePolicy

# Monday
WEEKDAY_MORNING = datetime(2024, 5, 6, 10, 0)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> ManualClock:
    """Clock parked on a Monday at 10:00."""
    return ManualClock(WEEKDAY_MORNING)


@pytest.fixture
def config() -> FareCardConfig:
    return FareCardConfig()


@pytest.fixture
def make_card(clock: ManualClock, config: FareCardConfig):
    """Factory for cards sharing the test clock."""

    def _make(policy: FarePolicy = FarePolicy.STANDARD, top_up: int | None = None) -> CardAccount:
        card = CardAccount(policy=policy, clock=clock, config=config)
        if top_up is not None:
            assert card.top_up(top_up)
        return card

    return _make
