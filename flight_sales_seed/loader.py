"""
Batched seed loader for flight_sales.

Generates synthetic sales and writes them with one bulk insert per batch.
Runs single-threaded; each batch is its own transaction, so an aborted run
leaves every completed batch in place.
"""

import logging
import time
from collections.abc import Callable, Iterator

import click
import psycopg
from psycopg import Connection

from flight_sales_seed.backends import DirectBackend, StagingBackend
from flight_sales_seed.exceptions import (
    BatchInsertError,
    InvalidSeedConfigError,
    TableNotFoundError,
)
from flight_sales_seed.generators import BaseGenerator, FlightSaleGenerator
from flight_sales_seed.generators.faker_generator import utc_now
from flight_sales_seed.models import LoadResult, TableInfo
from flight_sales_seed.schema import FLIGHT_SALES_TABLE, table_exists

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_RECORDS = 3_000_000
DEFAULT_BATCH_SIZE = 10_000


class SeedLoader:
    """Generate and insert flight sales in fixed-size batches."""

    def __init__(
        self,
        backend: DirectBackend | StagingBackend,
        generator: BaseGenerator | None = None,
        total_records: int = DEFAULT_TOTAL_RECORDS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        table_info: TableInfo = FLIGHT_SALES_TABLE,
        progress: Callable[[str], None] | None = click.echo,
    ):
        """
        Initialize loader.

        Args:
            backend: Where batches are written
            generator: Record source (default: unseeded FlightSaleGenerator)
            total_records: Rows to insert in total
            batch_size: Rows per bulk insert
            table_info: Target table definition
            progress: Called with "Inserted batch X of Y" after each batch
                (None to disable)

        Raises:
            InvalidSeedConfigError: If batch_size <= 0 or total_records < 0
        """
        if batch_size <= 0 or total_records < 0:
            raise InvalidSeedConfigError(total_records, batch_size)

        self.backend = backend
        self.generator = generator if generator is not None else FlightSaleGenerator()
        self.total_records = total_records
        self.batch_size = batch_size
        self.table_info = table_info
        self.progress = progress

    def batch_count(self) -> int:
        """Number of bulk inserts a run performs."""
        return -(-self.total_records // self.batch_size)

    def batch_sizes(self) -> Iterator[int]:
        """Rows per batch; only the last batch may be short."""
        remaining = self.total_records
        while remaining > 0:
            size = min(self.batch_size, remaining)
            yield size
            remaining -= size

    def run(self) -> LoadResult:
        """
        Generate and insert all batches.

        Returns:
            LoadResult summary

        Raises:
            BatchInsertError: If a batch insert fails (the run stops there)
        """
        batch_count = self.batch_count()
        logger.info(
            f"Seeding {self.total_records:,} rows into {self.table_info.name} "
            f"in {batch_count} batches of up to {self.batch_size:,}"
        )

        start = time.perf_counter()
        rows_inserted = 0

        for batch_number, size in enumerate(self.batch_sizes(), start=1):
            sales = self.generator.generate_batch(size)
            timestamp = utc_now()
            rows = [sale.as_row(timestamp) for sale in sales]

            try:
                rows_inserted += self.backend.insert_rows(self.table_info, rows)
            except psycopg.Error as e:
                logger.error(f"Batch {batch_number} of {batch_count} failed: {e}")
                raise BatchInsertError(batch_number, batch_count, e) from e

            logger.debug(f"Batch {batch_number}: {size} rows")
            if self.progress is not None:
                self.progress(f"Inserted batch {batch_number} of {batch_count}")

        result = LoadResult(
            total_records=self.total_records,
            batch_size=self.batch_size,
            batches=batch_count,
            rows_inserted=rows_inserted,
            elapsed=time.perf_counter() - start,
        )
        logger.info(
            f"Inserted {result.rows_inserted:,} rows in {result.elapsed:.1f}s "
            f"({result.rows_per_second:,.0f} rows/s)"
        )
        return result


def load_flight_sales(
    backend: DirectBackend | StagingBackend,
    total_records: int = DEFAULT_TOTAL_RECORDS,
    batch_size: int = DEFAULT_BATCH_SIZE,
    seed: int | None = None,
    locale: str | None = None,
    progress: Callable[[str], None] | None = click.echo,
) -> LoadResult:
    """
    Seed flight_sales through a backend with a Faker generator.

    Example:
        >>> backend = StagingBackend()
        >>> load_flight_sales(backend, total_records=20_000, seed=42)
        Inserted batch 1 of 2
        Inserted batch 2 of 2
    """
    loader = SeedLoader(
        backend,
        generator=FlightSaleGenerator(seed=seed, locale=locale),
        total_records=total_records,
        batch_size=batch_size,
        progress=progress,
    )
    return loader.run()


def seed_flight_sales(
    conn: Connection,
    schema: str = "public",
    method: str = "copy",
    **kwargs,
) -> LoadResult:
    """
    Seed flight_sales in a PostgreSQL database.

    Args:
        conn: PostgreSQL connection
        schema: Schema holding the table
        method: Bulk insert method ("copy" or "values")
        **kwargs: Passed to load_flight_sales

    Raises:
        TableNotFoundError: If the table has not been created
    """
    if not table_exists(conn, schema, FLIGHT_SALES_TABLE.name):
        raise TableNotFoundError(FLIGHT_SALES_TABLE.name, schema)

    backend = DirectBackend(conn, schema=schema, method=method)
    return load_flight_sales(backend, **kwargs)
