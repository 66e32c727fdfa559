"""Tests for the flight_sales table definition and migration."""

import psycopg
import pytest
from psycopg import Connection

from flight_sales_seed.exceptions import TableExistsError
from flight_sales_seed.schema import (
    DEPARTURE_AFTER_PURCHASE,
    FLIGHT_SALES_TABLE,
    create_flight_sales_table,
    drop_flight_sales_table,
    flight_sales_table,
    render_create_table,
    table_exists,
)

# ============================================================================
# Table definition (no database)
# ============================================================================


def test_table_columns():
    """Six business columns plus id and bookkeeping timestamps."""
    names = [col.name for col in FLIGHT_SALES_TABLE.columns]

    assert names == [
        "id",
        "purchase_datetime",
        "base_price",
        "fees",
        "client_id",
        "departure_datetime",
        "created_at",
        "updated_at",
    ]
    assert FLIGHT_SALES_TABLE.pk_column == "id"


def test_column_types():
    columns = {col.name: col for col in FLIGHT_SALES_TABLE.columns}

    assert columns["base_price"].pg_type == "numeric"
    assert columns["fees"].pg_type == "numeric"
    assert columns["client_id"].pg_type == "integer"
    assert columns["purchase_datetime"].pg_type.startswith("timestamp")
    assert not columns["created_at"].is_nullable
    assert columns["client_id"].is_nullable


def test_insert_columns_skip_identity():
    assert "id" not in FLIGHT_SALES_TABLE.insert_columns
    assert len(FLIGHT_SALES_TABLE.insert_columns) == 7


def test_no_constraints_by_default():
    assert FLIGHT_SALES_TABLE.check_constraints == []
    assert flight_sales_table() is FLIGHT_SALES_TABLE


def test_check_constraint_is_opt_in():
    """Requesting the CHECK returns a copy; the shared definition is untouched."""
    checked = flight_sales_table(check_departure=True)

    assert checked.check_constraints == [DEPARTURE_AFTER_PURCHASE]
    assert FLIGHT_SALES_TABLE.check_constraints == []


def test_render_create_table():
    ddl = render_create_table(FLIGHT_SALES_TABLE, schema="public").as_string()

    assert ddl.startswith('CREATE TABLE "public"."flight_sales"')
    assert '"id" bigint GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY' in ddl
    assert '"base_price" numeric' in ddl
    assert '"created_at" timestamp(6) without time zone NOT NULL' in ddl
    assert "CHECK" not in ddl


def test_render_create_table_with_check():
    ddl = render_create_table(
        flight_sales_table(check_departure=True), schema="sales"
    ).as_string()

    assert ddl.startswith('CREATE TABLE "sales"."flight_sales"')
    assert (
        'CONSTRAINT "flight_sales_departure_after_purchase" '
        "CHECK (departure_datetime >= purchase_datetime)"
    ) in ddl


# ============================================================================
# Migration (PostgreSQL)
# ============================================================================


@pytest.mark.integration
def test_create_and_drop(db_conn: Connection, test_schema: str):
    assert not table_exists(db_conn, test_schema)

    create_flight_sales_table(db_conn, schema=test_schema)
    assert table_exists(db_conn, test_schema)

    drop_flight_sales_table(db_conn, schema=test_schema)
    assert not table_exists(db_conn, test_schema)


@pytest.mark.integration
def test_created_columns(db_conn: Connection, test_schema: str):
    create_flight_sales_table(db_conn, schema=test_schema)

    with db_conn.cursor() as cur:
        cur.execute(
            """
            SELECT column_name, data_type
            FROM information_schema.columns
            WHERE table_schema = %s AND table_name = 'flight_sales'
            ORDER BY ordinal_position
            """,
            (test_schema,),
        )
        columns = dict(cur.fetchall())

    assert columns == {
        "id": "bigint",
        "purchase_datetime": "timestamp without time zone",
        "base_price": "numeric",
        "fees": "numeric",
        "client_id": "integer",
        "departure_datetime": "timestamp without time zone",
        "created_at": "timestamp without time zone",
        "updated_at": "timestamp without time zone",
    }


@pytest.mark.integration
def test_create_twice_fails(db_conn: Connection, test_schema: str):
    create_flight_sales_table(db_conn, schema=test_schema)

    with pytest.raises(TableExistsError):
        create_flight_sales_table(db_conn, schema=test_schema)


@pytest.mark.integration
def test_create_if_not_exists(db_conn: Connection, test_schema: str):
    assert create_flight_sales_table(db_conn, schema=test_schema) is True
    assert create_flight_sales_table(db_conn, schema=test_schema, if_not_exists=True) is False

    assert table_exists(db_conn, test_schema)


@pytest.mark.integration
def test_skipped_create_leaves_connection_idle(db_conn: Connection, test_schema: str):
    """The existence check must not leave a transaction open on the caller's connection."""
    create_flight_sales_table(db_conn, schema=test_schema)

    create_flight_sales_table(db_conn, schema=test_schema, if_not_exists=True)
    assert db_conn.info.transaction_status == psycopg.pq.TransactionStatus.IDLE

    with pytest.raises(TableExistsError):
        create_flight_sales_table(db_conn, schema=test_schema)
    assert db_conn.info.transaction_status == psycopg.pq.TransactionStatus.IDLE


@pytest.mark.integration
def test_drop_missing_table_is_noop(db_conn: Connection, test_schema: str):
    drop_flight_sales_table(db_conn, schema=test_schema)

    assert not table_exists(db_conn, test_schema)


@pytest.mark.integration
def test_departure_check_rejects_bad_rows(db_conn: Connection, test_schema: str):
    create_flight_sales_table(db_conn, schema=test_schema, check_departure=True)

    with pytest.raises(psycopg.errors.CheckViolation):
        with db_conn.cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO {test_schema}.flight_sales
                    (purchase_datetime, departure_datetime, created_at, updated_at)
                VALUES ('2024-05-01', '2024-04-01', NOW(), NOW())
                """
            )
    db_conn.rollback()


@pytest.mark.integration
def test_no_check_by_default(db_conn: Connection, test_schema: str):
    """Without the constraint, the schema accepts departure before purchase."""
    create_flight_sales_table(db_conn, schema=test_schema)

    with db_conn.cursor() as cur:
        cur.execute(
            f"""
            INSERT INTO {test_schema}.flight_sales
                (purchase_datetime, departure_datetime, created_at, updated_at)
            VALUES ('2024-05-01', '2024-04-01', NOW(), NOW())
            """
        )
        cur.execute(f"SELECT COUNT(*) FROM {test_schema}.flight_sales")
        assert cur.fetchone()[0] == 1
