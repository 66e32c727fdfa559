"""
flight-sales-seed - flight_sales schema and bulk seed data for PostgreSQL.

This package provides tools for:
- Creating (and dropping) the flight_sales table
- Generating synthetic flight sales with Faker
- Bulk-loading millions of rows in fixed-size batches
"""

__version__ = "0.1.0"

from flight_sales_seed.backends import DirectBackend, StagingBackend
from flight_sales_seed.generators import (
    BaseGenerator,
    FlightSaleGenerator,
    generate_flight_sale,
)
from flight_sales_seed.loader import SeedLoader, load_flight_sales, seed_flight_sales
from flight_sales_seed.models import FlightSale, LoadResult
from flight_sales_seed.schema import (
    FLIGHT_SALES_TABLE,
    create_flight_sales_table,
    drop_flight_sales_table,
)

__all__ = [
    "FLIGHT_SALES_TABLE",
    "BaseGenerator",
    "DirectBackend",
    "FlightSale",
    "FlightSaleGenerator",
    "LoadResult",
    "SeedLoader",
    "StagingBackend",
    "create_flight_sales_table",
    "drop_flight_sales_table",
    "generate_flight_sale",
    "load_flight_sales",
    "seed_flight_sales",
    "__version__",
]
