"""
In-memory data store for TreeGrid tables.

The DataStore owns every Table and is the only place cells are mutated.
Both protocol adapters share one instance, created at startup from seed
data and kept for the process lifetime.

Invariants:
    - update_cell is the sole mutation entry point
    - Validation fully precedes mutation; a failed update changes nothing
    - Validation order: table, column, primary key, editable, row
    - Readers get snapshots, never live rows

Thread safety:
    One threading.Lock per table, held for exactly one update or one
    snapshot copy. No lock is ever held across an await or network I/O,
    so the store is safe from asyncio handlers and from thread pools.

How to change safely:
    - Keep the validation order; clients rely on which error wins
    - Type checking belongs to the codecs, not to update_cell
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import (
    ColumnNotFoundError,
    ColumnReadOnlyError,
    PrimaryKeyReadOnlyError,
    RowNotFoundError,
    TableNotFoundError,
)
from .model import ColumnDef, Table
from .values import Value

logger = logging.getLogger(__name__)


class DataStore:
    """Owner of all tables.

    Attributes:
        table_ids: Table ids in registration order

    Example:
        >>> store = DataStore.from_seed()
        >>> store.update_cell("employees", "1", "salary", Value.real(600000))
        >>> store.get_table("employees").find_row("1").get("salary")
        Value.real(600000.0)
    """

    def __init__(self, tables: Iterable[Table]) -> None:
        """Initialize the store.

        Args:
            tables: Tables to own; the store takes them over exclusively

        Raises:
            ValueError: If two tables share an id
        """
        self._tables: Dict[str, Table] = {}
        self._locks: Dict[str, threading.Lock] = {}
        for table in tables:
            if table.id in self._tables:
                raise ValueError(f"Duplicate table id '{table.id}'")
            self._tables[table.id] = table
            self._locks[table.id] = threading.Lock()

        logger.debug(f"DataStore initialized with tables: {list(self._tables)}")

    @classmethod
    def from_seed(cls) -> DataStore:
        """Create a store populated with the built-in seed tables."""
        from .seed import seed_tables

        return cls(seed_tables())

    @property
    def table_ids(self) -> List[str]:
        return list(self._tables)

    def has_table(self, table_id: str) -> bool:
        return table_id in self._tables

    def list_tables(self) -> List[Tuple[str, str]]:
        """Return (id, name) for every table in registration order."""
        return [(table.id, table.name) for table in self._tables.values()]

    def get_table(self, table_id: str) -> Optional[Table]:
        """Return a snapshot of a table, or None if it does not exist."""
        table = self._tables.get(table_id)
        if table is None:
            return None
        with self._locks[table_id]:
            return table.copy()

    def resolve_table(self, table_id: str) -> Table:
        """Return a snapshot of a table.

        Raises:
            TableNotFoundError: If the table does not exist
        """
        table = self.get_table(table_id)
        if table is None:
            raise TableNotFoundError(table_id)
        return table

    def find_column(self, table_id: str, column_id: str) -> ColumnDef:
        """Look up a column definition.

        Raises:
            TableNotFoundError: If the table does not exist
            ColumnNotFoundError: If the column is not in the table's schema
        """
        table = self._tables.get(table_id)
        if table is None:
            raise TableNotFoundError(table_id)
        # Schemas are immutable, no lock needed
        col = table.find_column(column_id)
        if col is None:
            raise ColumnNotFoundError(table_id, column_id)
        return col

    def update_cell(
        self,
        table_id: str,
        row_id: str,
        column_id: str,
        value: Value,
    ) -> None:
        """Replace one cell's value.

        The value is stored as given; callers decode and type-check it
        against the column first.

        Args:
            table_id: Table handle
            row_id: Primary key of the row
            column_id: Column to write
            value: New cell content

        Raises:
            TableNotFoundError: Unknown table
            ColumnNotFoundError: Unknown column
            PrimaryKeyReadOnlyError: Column is the primary key
            ColumnReadOnlyError: Column is not editable
            RowNotFoundError: Unknown row
        """
        col = self.find_column(table_id, column_id)

        if col.is_primary:
            raise PrimaryKeyReadOnlyError(table_id, column_id)
        if not col.is_editable:
            raise ColumnReadOnlyError(table_id, column_id)

        table = self._tables[table_id]
        with self._locks[table_id]:
            row = table.find_row(row_id)
            if row is None:
                raise RowNotFoundError(table_id, row_id)
            row.cells[column_id] = value

        logger.info(
            "Cell updated",
            extra={
                "table_id": table_id,
                "row_id": row_id,
                "column_id": column_id,
                "value_kind": value.kind.value,
            },
        )
