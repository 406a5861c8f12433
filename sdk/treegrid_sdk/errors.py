"""
Error types for TreeGrid SDK.

This module defines all exception types raised by the SDK:
- TreeGridError: Base exception
- ConnectionError: Server unreachable or RPC transport failure
- NotFoundError: Unknown table
- UpdateRejectedError: Server refused a cell update

Invariants:
    - All errors inherit from TreeGridError
    - Errors include context for debugging
    - code mirrors the server's error_code where one exists
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TreeGridError(Exception):
    """Base exception for all TreeGrid SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "TREEGRID_ERROR"
        self.details = details or {}


class ConnectionError(TreeGridError):
    """Failed to talk to the TreeGrid server.

    Raised when:
    - Server is unreachable
    - The RPC fails with a non-domain status
    """

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        status: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="CONNECTION_ERROR",
            details={"address": address, "status": status},
        )
        self.address = address
        self.status = status


class NotFoundError(TreeGridError):
    """Table not found."""

    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: str,
    ) -> None:
        super().__init__(
            message,
            code="TABLE_NOT_FOUND",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id,
            },
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UpdateRejectedError(TreeGridError):
    """Cell update refused by the server.

    Raised when:
    - Column or row is unknown
    - Column is read-only or the primary key
    - Value type does not match the column
    """

    def __init__(
        self,
        message: str,
        code: str,
        table_id: str,
        row_id: str,
        column_id: str,
    ) -> None:
        super().__init__(
            message,
            code=code or "UPDATE_REJECTED",
            details={
                "table_id": table_id,
                "row_id": row_id,
                "column_id": column_id,
            },
        )
        self.table_id = table_id
        self.row_id = row_id
        self.column_id = column_id
