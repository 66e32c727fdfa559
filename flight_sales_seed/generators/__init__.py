"""Flight sale record generators."""

from flight_sales_seed.generators.base import BaseGenerator
from flight_sales_seed.generators.faker_generator import (
    FlightSaleGenerator,
    generate_flight_sale,
)

__all__ = ["BaseGenerator", "FlightSaleGenerator", "generate_flight_sale"]
