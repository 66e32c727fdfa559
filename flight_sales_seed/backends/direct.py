"""Direct backend - bulk inserts into PostgreSQL."""

import logging
from typing import Any

import psycopg
from psycopg import Connection, sql

from flight_sales_seed.models import TableInfo

logger = logging.getLogger(__name__)

# PostgreSQL wire protocol limit on bind parameters per statement
MAX_BIND_PARAMETERS = 65_535

INSERT_METHODS = ("copy", "values")


class DirectBackend:
    """
    Insert rows into PostgreSQL, one transaction per call.

    Methods:
        copy: COPY ... FROM STDIN (default, fastest)
        values: multi-row INSERT ... VALUES, chunked under the bind-parameter limit
    """

    def __init__(self, conn: Connection, schema: str = "public", method: str = "copy"):
        """
        Initialize backend.

        Args:
            conn: PostgreSQL connection (not in autocommit mode)
            schema: Schema name for qualified table names
            method: "copy" or "values"

        Raises:
            ValueError: If method is unknown
        """
        if method not in INSERT_METHODS:
            raise ValueError(
                f"Unknown insert method '{method}'. Available: {', '.join(INSERT_METHODS)}"
            )
        self.conn = conn
        self.schema = schema
        self.method = method

    def insert_rows(self, table_info: TableInfo, rows: list[dict[str, Any]]) -> int:
        """
        Insert rows as one operation and commit.

        The whole call is one transaction: on error it is rolled back and the
        error re-raised.

        Args:
            table_info: Table metadata
            rows: Row dicts keyed by column name (identity PK omitted)

        Returns:
            Number of rows inserted
        """
        if not rows:
            return 0

        columns = table_info.insert_columns
        try:
            if self.method == "copy":
                self._copy_rows(table_info, columns, rows)
            else:
                self._insert_values(table_info, columns, rows)
            self.conn.commit()
        except psycopg.Error:
            self.conn.rollback()
            raise

        logger.debug(f"Inserted {len(rows)} rows into {self.schema}.{table_info.name}")
        return len(rows)

    def _copy_rows(
        self, table_info: TableInfo, columns: list[str], rows: list[dict[str, Any]]
    ) -> None:
        query = sql.SQL("COPY {table} ({columns}) FROM STDIN").format(
            table=sql.Identifier(self.schema, table_info.name),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
        )
        with self.conn.cursor() as cur:
            with cur.copy(query) as copy:
                for row in rows:
                    copy.write_row([row.get(col) for col in columns])

    def _insert_values(
        self, table_info: TableInfo, columns: list[str], rows: list[dict[str, Any]]
    ) -> None:
        chunk_size = max(1, MAX_BIND_PARAMETERS // len(columns))
        single_placeholder = sql.SQL("({})").format(
            sql.SQL(", ").join(sql.Placeholder() * len(columns))
        )

        with self.conn.cursor() as cur:
            for i in range(0, len(rows), chunk_size):
                chunk = rows[i : i + chunk_size]

                query = sql.SQL("INSERT INTO {table} ({columns}) VALUES {values}").format(
                    table=sql.Identifier(self.schema, table_info.name),
                    columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
                    values=sql.SQL(", ").join([single_placeholder] * len(chunk)),
                )

                # Flatten values: [row1_col1, row1_col2, row2_col1, ...]
                values = [row.get(col) for row in chunk for col in columns]
                cur.execute(query, values)
