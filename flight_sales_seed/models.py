"""Data models and type definitions."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass
class ColumnInfo:
    """
    Column definition used to render DDL and drive inserts.

    Attributes:
        name: Column name
        pg_type: PostgreSQL data type
        is_nullable: Whether column allows NULL values
        is_primary_key: Whether column is the (identity) primary key
        default_value: Database default value expression (if any)
    """

    name: str
    pg_type: str
    is_nullable: bool = True
    is_primary_key: bool = False
    default_value: str | None = None


@dataclass
class CheckConstraint:
    """A named CHECK constraint."""

    name: str
    expression: str


@dataclass
class TableInfo:
    """
    Table definition.

    Attributes:
        name: Table name
        columns: Column definitions, in DDL order
        check_constraints: Optional CHECK constraints
    """

    name: str
    columns: list[ColumnInfo]
    check_constraints: list[CheckConstraint] = field(default_factory=list)

    @property
    def pk_column(self) -> str | None:
        """Primary key column name, or None if the table has none."""
        for col in self.columns:
            if col.is_primary_key:
                return col.name
        return None

    @property
    def insert_columns(self) -> list[str]:
        """Columns written on insert (the identity primary key is generated)."""
        return [col.name for col in self.columns if not col.is_primary_key]


@dataclass
class FlightSale:
    """
    A single synthetic ticket sale.

    `departure_datetime >= purchase_datetime` holds for every generated sale;
    the schema does not enforce it unless the CHECK constraint is enabled.
    """

    purchase_datetime: datetime
    base_price: Decimal
    fees: Decimal
    client_id: int
    departure_datetime: datetime

    def as_row(self, timestamp: datetime) -> dict[str, Any]:
        """
        Build the insert row, stamping bookkeeping columns.

        Args:
            timestamp: Value for both created_at and updated_at

        Returns:
            Dict keyed by column name
        """
        return {
            "purchase_datetime": self.purchase_datetime,
            "base_price": self.base_price,
            "fees": self.fees,
            "client_id": self.client_id,
            "departure_datetime": self.departure_datetime,
            "created_at": timestamp,
            "updated_at": timestamp,
        }


@dataclass
class LoadResult:
    """Summary of a completed seed run."""

    total_records: int
    batch_size: int
    batches: int
    rows_inserted: int
    elapsed: float = 0.0

    @property
    def rows_per_second(self) -> float:
        if self.elapsed <= 0:
            return 0.0
        return self.rows_inserted / self.elapsed
