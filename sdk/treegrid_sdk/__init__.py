"""
TreeGrid Python SDK - Client library for the TreeGrid table server.

Example:
    >>> from treegrid_sdk import TableClient
    >>>
    >>> async with TableClient("localhost", 50051) as client:
    ...     schema = await client.get_schema("employees")
    ...     await client.update_cell("employees", "1", "salary", 600000)

Invariants:
    - Cell values are plain Python scalars on the client side
    - Unknown tables raise NotFoundError; refused updates raise
      UpdateRejectedError carrying the server's error code

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import ColumnInfo, TableClient, TableRow, TableSchema
from .errors import (
    ConnectionError,
    NotFoundError,
    TreeGridError,
    UpdateRejectedError,
)

__all__ = [
    # Version
    "__version__",
    # Client
    "TableClient",
    "TableSchema",
    "ColumnInfo",
    "TableRow",
    # Errors
    "TreeGridError",
    "ConnectionError",
    "NotFoundError",
    "UpdateRejectedError",
]
