"""Base generator interface."""

from abc import ABC, abstractmethod

from flight_sales_seed.models import FlightSale


class BaseGenerator(ABC):
    """
    Base class for flight sale generators.

    Subclass this to feed the loader with something other than Faker data,
    e.g. fixed fixtures in tests.

    Example:
        >>> class FixedGenerator(BaseGenerator):
        ...     def generate(self):
        ...         return FlightSale(...)
        >>>
        >>> SeedLoader(backend, generator=FixedGenerator(), total_records=10)
    """

    @abstractmethod
    def generate(self) -> FlightSale:
        """Generate one sale."""
        pass

    def generate_batch(self, count: int) -> list[FlightSale]:
        """
        Generate `count` independent sales.

        Args:
            count: Number of sales to generate

        Returns:
            List of FlightSale
        """
        return [self.generate() for _ in range(count)]
