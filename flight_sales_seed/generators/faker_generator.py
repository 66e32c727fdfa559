"""Faker-based flight sale generator."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from faker import Faker

from flight_sales_seed.generators.base import BaseGenerator
from flight_sales_seed.models import FlightSale

PURCHASE_WINDOW = timedelta(days=5 * 365)
DEPARTURE_WINDOW = timedelta(days=365)
BASE_PRICE_RANGE = (Decimal("100.00"), Decimal("1000.00"))
FEES_RANGE = (Decimal("10.00"), Decimal("100.00"))
CLIENT_ID_DIGITS = 6


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (timestamp without time zone)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def random_price(fake: Faker, price_range: tuple[Decimal, Decimal]) -> Decimal:
    """Uniform price in the inclusive range, to the cent."""
    low, high = price_range
    cents = fake.random_int(min=int(low * 100), max=int(high * 100))
    return Decimal(cents).scaleb(-2)


def generate_flight_sale(fake: Faker, now: datetime) -> FlightSale:
    """
    Generate one sale from a random source.

    Pure with respect to `fake`: a Faker seeded the same way and the same
    `now` produce the same sale.

    Args:
        fake: Faker instance supplying randomness
        now: Upper bound for the purchase time (naive UTC)

    Returns:
        FlightSale with departure_datetime >= purchase_datetime
    """
    # Faker truncates range bounds to whole seconds; both times must too.
    purchase = fake.date_time_between(
        start_date=now - PURCHASE_WINDOW, end_date=now
    ).replace(microsecond=0)
    departure = fake.date_time_between(
        start_date=purchase, end_date=purchase + DEPARTURE_WINDOW
    ).replace(microsecond=0)

    return FlightSale(
        purchase_datetime=purchase,
        base_price=random_price(fake, BASE_PRICE_RANGE),
        fees=random_price(fake, FEES_RANGE),
        client_id=fake.random_number(digits=CLIENT_ID_DIGITS, fix_len=True),
        departure_datetime=departure,
    )


class FlightSaleGenerator(BaseGenerator):
    """Generate realistic flight sales using Faker."""

    def __init__(
        self,
        seed: int | None = None,
        locale: str | None = None,
        now: datetime | None = None,
        faker: Faker | None = None,
    ):
        """
        Initialize generator.

        Args:
            seed: Seed for reproducible output (None = random)
            locale: Faker locale (default: Faker's default)
            now: Fixed reference time; defaults to the current UTC time per batch
            faker: Pre-built Faker instance (seed is still applied if given)
        """
        self.fake = faker if faker is not None else Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        self.seed = seed
        self.now = now

    def _reference_time(self) -> datetime:
        return self.now if self.now is not None else utc_now()

    def generate(self) -> FlightSale:
        return generate_flight_sale(self.fake, self._reference_time())

    def generate_batch(self, count: int) -> list[FlightSale]:
        now = self._reference_time()
        return [generate_flight_sale(self.fake, now) for _ in range(count)]
