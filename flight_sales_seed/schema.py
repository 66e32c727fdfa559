"""
Schema definition for the flight_sales table.

Creates (and drops) a single table. Migration bookkeeping, versioning and
schema diffing are left to whatever runs these functions; `create` and `drop`
are each other's inverse.
"""

import logging
from dataclasses import replace

from psycopg import Connection, sql

from flight_sales_seed.exceptions import TableExistsError
from flight_sales_seed.models import CheckConstraint, ColumnInfo, TableInfo

logger = logging.getLogger(__name__)

TABLE_NAME = "flight_sales"

FLIGHT_SALES_TABLE = TableInfo(
    name=TABLE_NAME,
    columns=[
        ColumnInfo(name="id", pg_type="bigint", is_nullable=False, is_primary_key=True),
        ColumnInfo(name="purchase_datetime", pg_type="timestamp(6) without time zone"),
        ColumnInfo(name="base_price", pg_type="numeric"),
        ColumnInfo(name="fees", pg_type="numeric"),
        ColumnInfo(name="client_id", pg_type="integer"),
        ColumnInfo(name="departure_datetime", pg_type="timestamp(6) without time zone"),
        ColumnInfo(
            name="created_at", pg_type="timestamp(6) without time zone", is_nullable=False
        ),
        ColumnInfo(
            name="updated_at", pg_type="timestamp(6) without time zone", is_nullable=False
        ),
    ],
)

DEPARTURE_AFTER_PURCHASE = CheckConstraint(
    name="flight_sales_departure_after_purchase",
    expression="departure_datetime >= purchase_datetime",
)


def flight_sales_table(check_departure: bool = False) -> TableInfo:
    """
    Get the flight_sales table definition.

    Args:
        check_departure: Add the departure >= purchase CHECK constraint

    Returns:
        TableInfo (a copy when the constraint is requested)
    """
    if not check_departure:
        return FLIGHT_SALES_TABLE
    return replace(FLIGHT_SALES_TABLE, check_constraints=[DEPARTURE_AFTER_PURCHASE])


def render_create_table(table_info: TableInfo, schema: str = "public") -> sql.Composed:
    """
    Render CREATE TABLE for a table definition.

    Column types and CHECK expressions come from code, not user input, and are
    inlined as SQL; names are quoted as identifiers.
    """
    definitions = []
    for col in table_info.columns:
        parts = [sql.Identifier(col.name), sql.SQL(col.pg_type)]
        if col.is_primary_key:
            parts.append(sql.SQL("GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"))
        elif not col.is_nullable:
            parts.append(sql.SQL("NOT NULL"))
        if col.default_value is not None:
            parts.append(sql.SQL("DEFAULT {}").format(sql.SQL(col.default_value)))
        definitions.append(sql.SQL(" ").join(parts))

    for constraint in table_info.check_constraints:
        definitions.append(
            sql.SQL("CONSTRAINT {} CHECK ({})").format(
                sql.Identifier(constraint.name), sql.SQL(constraint.expression)
            )
        )

    return sql.SQL("CREATE TABLE {table} (\n    {columns}\n)").format(
        table=sql.Identifier(schema, table_info.name),
        columns=sql.SQL(",\n    ").join(definitions),
    )


def table_exists(conn: Connection, schema: str, table: str = TABLE_NAME) -> bool:
    """Check information_schema for a base table."""
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT EXISTS(
                SELECT 1 FROM information_schema.tables
                WHERE table_schema = %s AND table_name = %s
            )
            """,
            (schema, table),
        )
        return bool(cur.fetchone()[0])


def create_flight_sales_table(
    conn: Connection,
    schema: str = "public",
    check_departure: bool = False,
    if_not_exists: bool = False,
) -> bool:
    """
    Create the flight_sales table and commit.

    Args:
        conn: PostgreSQL connection
        schema: Target schema
        check_departure: Enforce departure >= purchase with a CHECK constraint
        if_not_exists: Leave an existing table untouched instead of failing

    Returns:
        True if the table was created, False if it already existed

    Raises:
        TableExistsError: If the table exists and if_not_exists is False
    """
    table_info = flight_sales_table(check_departure)

    if table_exists(conn, schema, table_info.name):
        conn.rollback()
        if not if_not_exists:
            raise TableExistsError(table_info.name, schema)
        logger.info(f"Table {schema}.{table_info.name} already exists, skipping")
        return False

    with conn.cursor() as cur:
        cur.execute(render_create_table(table_info, schema))
    conn.commit()

    logger.info(
        f"Created table {schema}.{table_info.name}"
        + (" with departure CHECK constraint" if check_departure else "")
    )
    return True


def drop_flight_sales_table(
    conn: Connection, schema: str = "public", if_exists: bool = True
) -> None:
    """Drop the flight_sales table and commit (reverse of create)."""
    query = sql.SQL("DROP TABLE {exists}{table}").format(
        exists=sql.SQL("IF EXISTS " if if_exists else ""),
        table=sql.Identifier(schema, TABLE_NAME),
    )
    with conn.cursor() as cur:
        cur.execute(query)
    conn.commit()
    logger.info(f"Dropped table {schema}.{TABLE_NAME}")
