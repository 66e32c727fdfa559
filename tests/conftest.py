"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime

import psycopg
import pytest
from psycopg import Connection

from flight_sales_seed import FlightSaleGenerator, StagingBackend

TEST_DATABASE_URL = os.getenv(
    "FLIGHT_SALES_TEST_DATABASE_URL", "postgresql://localhost/flight_sales_test"
)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time for deterministic generation."""
    return datetime(2024, 7, 9, 15, 28, 3)


@pytest.fixture
def generator(fixed_now: datetime) -> FlightSaleGenerator:
    """Seeded generator with a fixed reference time."""
    return FlightSaleGenerator(seed=42, now=fixed_now)


@pytest.fixture
def staging_backend() -> StagingBackend:
    return StagingBackend()


@pytest.fixture
def db_conn() -> Connection:
    """
    Provide a test database connection.

    Uses FLIGHT_SALES_TEST_DATABASE_URL; tests depending on it are skipped
    when the database cannot be reached.
    """
    try:
        conn = psycopg.connect(TEST_DATABASE_URL, autocommit=False, connect_timeout=3)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available at {TEST_DATABASE_URL}: {e}")

    yield conn

    # Rollback any changes
    conn.rollback()
    conn.close()


@pytest.fixture
def test_schema(db_conn: Connection) -> str:
    """
    Create an empty schema for migration and seed tests.

    Returns the schema name.
    """
    schema_name = "test_flight_sales"

    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {schema_name} CASCADE")
        cur.execute(f"CREATE SCHEMA {schema_name}")
        db_conn.commit()

    yield schema_name

    # Cleanup
    db_conn.rollback()
    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {schema_name} CASCADE")
        db_conn.commit()


@pytest.fixture
def database_url() -> str:
    return TEST_DATABASE_URL
