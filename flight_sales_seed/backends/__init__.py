"""Backend implementations for seed data execution."""

from flight_sales_seed.backends.direct import DirectBackend
from flight_sales_seed.backends.staging import StagingBackend

__all__ = ["DirectBackend", "StagingBackend"]
