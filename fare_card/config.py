"""Configuration management for fare-card."""

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from fare_card.exceptions import ConfigurationError
from fare_card.windows import FRANCHISE_WINDOW, TRANSFER_WINDOW, ServiceWindow

DEFAULT_DENOMINATIONS = tuple(
    Decimal(v) for v in (2000, 3000, 4000, 5000, 8000, 10000, 15000, 20000, 25000, 30000)
)


@dataclass
class LedgerConfig:
    """Stored-value limits and accepted top-up amounts."""

    balance_cap: Decimal = Decimal("56000")
    negative_floor: Decimal = Decimal("-1200")
    denominations: tuple[Decimal, ...] = DEFAULT_DENOMINATIONS


@dataclass
class FareConfig:
    """Base fares and the time rules that modify them."""

    urban_base_fare: Decimal = Decimal("1580")
    interurban_base_fare: Decimal = Decimal("3000")
    half_fare_cooldown: timedelta = timedelta(minutes=5)
    transfer_gap: timedelta = timedelta(hours=1)
    daily_discounted_trips: int = 2
    franchise_window: ServiceWindow = FRANCHISE_WINDOW
    transfer_window: ServiceWindow = TRANSFER_WINDOW


@dataclass
class BikeConfig:
    """Bike-share station charges."""

    daily_rate: Decimal = Decimal("1777.50")
    fine_per_overage: Decimal = Decimal("1000")
    free_minutes: int = 120  # no fine below this rental length
    fine_period_minutes: int = 60


@dataclass
class FareCardConfig:
    """Main configuration for fare-card."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    fares: FareConfig = field(default_factory=FareConfig)
    bike: BikeConfig = field(default_factory=BikeConfig)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.ledger.negative_floor > 0:
            raise ConfigurationError("negative_floor must not be positive")
        if self.ledger.balance_cap <= 0:
            raise ConfigurationError("balance_cap must be positive")
        if self.fares.urban_base_fare < 0 or self.fares.interurban_base_fare < 0:
            raise ConfigurationError("base fares must not be negative")
        if self.bike.daily_rate < 0 or self.bike.fine_per_overage < 0:
            raise ConfigurationError("bike rate and fine must not be negative")
        if self.bike.fine_period_minutes <= 0:
            raise ConfigurationError("fine_period_minutes must be positive")

    @classmethod
    def from_env(cls) -> "FareCardConfig":
        """Create config from environment variables."""
        import os

        ledger = LedgerConfig(
            balance_cap=_env_decimal("FARE_BALANCE_CAP", "56000"),
            negative_floor=_env_decimal("FARE_NEGATIVE_FLOOR", "-1200"),
        )

        fares = FareConfig(
            urban_base_fare=_env_decimal("FARE_URBAN_BASE", "1580"),
            interurban_base_fare=_env_decimal("FARE_INTERURBAN_BASE", "3000"),
        )

        bike = BikeConfig(
            daily_rate=_env_decimal("BIKE_DAILY_RATE", "1777.50"),
            fine_per_overage=_env_decimal("BIKE_FINE", "1000"),
        )

        return cls(
            ledger=ledger,
            fares=fares,
            bike=bike,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _env_decimal(name: str, default: str) -> Decimal:
    import os

    raw = os.getenv(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} is not a decimal amount: {raw!r}") from exc


_default_config: FareCardConfig | None = None


def get_config() -> FareCardConfig:
    """Return the process-wide default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = FareCardConfig()
    return _default_config
