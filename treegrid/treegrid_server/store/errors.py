"""
Error types for TreeGrid table operations.

Every failure the store, the codecs or the adapters can report is one
ErrorKind. Each kind has exactly one exception class:
- TableNotFoundError, ColumnNotFoundError, RowNotFoundError
- PrimaryKeyReadOnlyError, ColumnReadOnlyError
- TypeMismatchError, MissingValueError
- InvalidRequestError

Invariants:
    - All errors inherit from TableStoreError and carry their kind
    - All errors are recoverable by the caller; none aborts the server
    - Messages are stable: clients may display them verbatim

How to change safely:
    - Add a new ErrorKind together with its exception class
    - Update the HTTP status mapping in api/http_server.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Taxonomy of recoverable table errors."""

    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"
    COLUMN_NOT_FOUND = "COLUMN_NOT_FOUND"
    ROW_NOT_FOUND = "ROW_NOT_FOUND"
    PRIMARY_KEY_READ_ONLY = "PRIMARY_KEY_READ_ONLY"
    COLUMN_READ_ONLY = "COLUMN_READ_ONLY"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    MISSING_VALUE = "MISSING_VALUE"
    INVALID_REQUEST_SHAPE = "INVALID_REQUEST_SHAPE"

    @property
    def is_not_found(self) -> bool:
        return self in (
            ErrorKind.TABLE_NOT_FOUND,
            ErrorKind.COLUMN_NOT_FOUND,
            ErrorKind.ROW_NOT_FOUND,
        )


class TableStoreError(Exception):
    """Base exception for all table errors.

    Attributes:
        kind: Which ErrorKind occurred
        message: Human-readable message
        details: Additional error context
    """

    kind: ErrorKind = ErrorKind.INVALID_REQUEST_SHAPE
    default_message: str = "Invalid request"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def code(self) -> str:
        """Error code for programmatic handling."""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "error_code": self.code}


class TableNotFoundError(TableStoreError):
    kind = ErrorKind.TABLE_NOT_FOUND
    default_message = "Table not found"

    def __init__(self, table_id: str) -> None:
        super().__init__(details={"table_id": table_id})
        self.table_id = table_id


class ColumnNotFoundError(TableStoreError):
    kind = ErrorKind.COLUMN_NOT_FOUND
    default_message = "Column not found"

    def __init__(self, table_id: str, column_id: str) -> None:
        super().__init__(details={"table_id": table_id, "column_id": column_id})
        self.column_id = column_id


class RowNotFoundError(TableStoreError):
    kind = ErrorKind.ROW_NOT_FOUND
    default_message = "Row not found"

    def __init__(self, table_id: str, row_id: str) -> None:
        super().__init__(details={"table_id": table_id, "row_id": row_id})
        self.row_id = row_id


class PrimaryKeyReadOnlyError(TableStoreError):
    kind = ErrorKind.PRIMARY_KEY_READ_ONLY
    default_message = "Primary key column is read-only"

    def __init__(self, table_id: str, column_id: str) -> None:
        super().__init__(details={"table_id": table_id, "column_id": column_id})
        self.column_id = column_id


class ColumnReadOnlyError(TableStoreError):
    kind = ErrorKind.COLUMN_READ_ONLY
    default_message = "Column is read-only"

    def __init__(self, table_id: str, column_id: str) -> None:
        super().__init__(details={"table_id": table_id, "column_id": column_id})
        self.column_id = column_id


class TypeMismatchError(TableStoreError):
    """Wire value does not fit the column's declared type.

    Attributes:
        expected: Name of the expected value shape ("string", "boolean", "numeric")
    """

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, expected: str, column_id: Optional[str] = None) -> None:
        super().__init__(
            f"Expected {expected} value",
            details={"expected": expected, "column_id": column_id},
        )
        self.expected = expected


class MissingValueError(TableStoreError):
    """Tagged wire value carries no variant at all (distinct from null)."""

    kind = ErrorKind.MISSING_VALUE
    default_message = "Value is missing"


class InvalidRequestError(TableStoreError):
    """Malformed input at the adapter boundary."""

    kind = ErrorKind.INVALID_REQUEST_SHAPE
    default_message = "Invalid request"
