"""
Store module for TreeGrid.

This module provides the data model and its owner:
- Value / ValueKind: the typed cell value
- ColumnDef / ColumnType / Row / Table: schema and data containers
- DataStore: table ownership, lookup and the single update operation
- Error taxonomy shared by the codecs and both adapters

Invariants:
    - Cells change only through DataStore.update_cell
    - Primary key columns are read-only on every path
"""

from .data_store import DataStore
from .errors import (
    ColumnNotFoundError,
    ColumnReadOnlyError,
    ErrorKind,
    InvalidRequestError,
    MissingValueError,
    PrimaryKeyReadOnlyError,
    RowNotFoundError,
    TableNotFoundError,
    TableStoreError,
    TypeMismatchError,
)
from .model import ColumnDef, ColumnType, Row, Table, column
from .values import NULL, Value, ValueKind

__all__ = [
    # Values
    "Value",
    "ValueKind",
    "NULL",
    # Model
    "ColumnDef",
    "ColumnType",
    "Row",
    "Table",
    "column",
    # Store
    "DataStore",
    # Errors
    "ErrorKind",
    "TableStoreError",
    "TableNotFoundError",
    "ColumnNotFoundError",
    "RowNotFoundError",
    "PrimaryKeyReadOnlyError",
    "ColumnReadOnlyError",
    "TypeMismatchError",
    "MissingValueError",
    "InvalidRequestError",
]
