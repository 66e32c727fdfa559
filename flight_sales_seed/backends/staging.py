"""Staging backend - in-memory backend for testing without database."""

from typing import Any

from flight_sales_seed.models import TableInfo


class StagingBackend:
    """
    In-memory backend for dry runs and tests.

    Simulates database behavior:
    - Generates the identity primary key (sequential IDs starting from 1)
    - Stores data in memory (not database)
    - Records each insert call so batching can be inspected

    With keep_rows=False only the calls and id sequences are kept, so a dry
    run holds no more than the batch being inserted.
    """

    def __init__(self, keep_rows: bool = True):
        """
        Initialize staging backend with empty state.

        Args:
            keep_rows: Store inserted rows for get_data()
        """
        self.keep_rows = keep_rows
        self._data: dict[str, list[dict[str, Any]]] = {}
        self._pk_sequences: dict[str, int] = {}
        self.insert_calls: list[int] = []

    def insert_rows(self, table_info: TableInfo, rows: list[dict[str, Any]]) -> int:
        """
        Simulate a bulk insert.

        Args:
            table_info: Table metadata
            rows: Row dicts (without the primary key)

        Returns:
            Number of rows stored
        """
        self.insert_calls.append(len(rows))
        if not rows:
            return 0

        table_name = table_info.name
        pk_column = table_info.pk_column
        next_pk = self._pk_sequences.setdefault(table_name, 1)

        if not self.keep_rows:
            if pk_column is not None:
                next_pk += len(rows)
            self._pk_sequences[table_name] = next_pk
            return len(rows)

        stored = self._data.setdefault(table_name, [])
        for row in rows:
            complete_row = row.copy()
            if pk_column is not None:
                complete_row[pk_column] = next_pk
                next_pk += 1
            stored.append(complete_row)

        self._pk_sequences[table_name] = next_pk
        return len(rows)

    def get_data(self, table_name: str) -> list[dict[str, Any]]:
        """
        Get in-memory data for inspection.

        Args:
            table_name: Table name

        Returns:
            List of row dicts for the table
        """
        return self._data.get(table_name, [])

    def clear(self):
        """Clear all in-memory data, sequences and recorded calls."""
        self._data.clear()
        self._pk_sequences.clear()
        self.insert_calls.clear()
