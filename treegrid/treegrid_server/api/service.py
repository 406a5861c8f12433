"""
Protocol-neutral table service shared by the HTTP and gRPC adapters.

Each adapter translates its wire format and calls into TableService, so
lookup, decoding and mutation follow the same sequence on both surfaces:

    resolve column -> decode wire value against it -> DataStore.update_cell

Invariants:
    - Every update is decoded through the caller's codec before the store
      sees it; the store re-checks primary/editable/row itself
    - Errors propagate as TableStoreError subclasses; adapters map them
    - Nothing here awaits, so no lock is ever held across I/O
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Tuple

from .._version import __version__
from ..store.data_store import DataStore
from ..store.errors import TableNotFoundError, TableStoreError
from ..store.model import ColumnDef, Table
from ..store.values import Value

logger = logging.getLogger(__name__)

Decoder = Callable[[Any, ColumnDef], Value]


class TableService:
    """Operations both protocol adapters expose.

    Attributes:
        store: The process-wide DataStore

    Example:
        >>> service = TableService(DataStore.from_seed())
        >>> service.apply_update("employees", "1", "salary", 600000, decode_json_value)
        Value.real(600000.0)
    """

    def __init__(self, store: DataStore) -> None:
        self.store = store

    def list_tables(self) -> List[Tuple[str, str]]:
        return self.store.list_tables()

    def resolve_table(self, table_id: str) -> Table:
        """Snapshot a table for a read endpoint.

        Raises:
            TableNotFoundError: If the table does not exist
        """
        return self.store.resolve_table(table_id)

    def require_table(self, table_id: str) -> None:
        """Check a table exists without snapshotting it.

        Raises:
            TableNotFoundError: If the table does not exist
        """
        if not self.store.has_table(table_id):
            raise TableNotFoundError(table_id)

    def apply_update(
        self,
        table_id: str,
        row_id: str,
        column_id: str,
        wire_value: Any,
        decode: Decoder,
    ) -> Value:
        """Decode a wire value for its column and write it.

        Args:
            table_id: Table handle
            row_id: Primary key of the row
            column_id: Column to write
            wire_value: Value in the adapter's wire representation
            decode: The adapter's decoder (wire value, column) -> Value

        Returns:
            The stored Value

        Raises:
            TableStoreError: Any lookup, decode or invariant failure
        """
        try:
            column = self.store.find_column(table_id, column_id)
            value = decode(wire_value, column)
            self.store.update_cell(table_id, row_id, column_id, value)
        except TableStoreError as e:
            logger.info(
                f"Cell update rejected: {e.message}",
                extra={
                    "table_id": table_id,
                    "row_id": row_id,
                    "column_id": column_id,
                    "error_code": e.code,
                },
            )
            raise
        return value

    def health(self) -> Dict[str, Any]:
        return {
            "healthy": True,
            "version": __version__,
            "table_count": len(self.store.table_ids),
        }
