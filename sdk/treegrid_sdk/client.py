"""
Async gRPC client for TreeGrid.

This module provides TableClient, a thin Python API over
tables.TableService. Cell values are plain Python scalars on the client
side (None, bool, int, float, str) and tagged protobuf Values on the wire.

Example:
    >>> async with TableClient("localhost", 50051) as client:
    ...     tables = await client.list_tables()
    ...     await client.update_cell("employees", "1", "salary", 600000)
    ...     rows = await client.get_rows("employees")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import grpc
from grpc import aio as grpc_aio

from treegrid.treegrid_server.codec.proto_codec import (
    column_type_from_proto,
    encode_proto_value,
)
from treegrid.treegrid_server.proto import tables_pb2 as pb
from treegrid.treegrid_server.proto import TableServiceStub
from treegrid.treegrid_server.store.values import Value

from .errors import ConnectionError, NotFoundError, UpdateRejectedError

logger = logging.getLogger(__name__)


@dataclass
class ColumnInfo:
    """Column metadata as exposed by the server."""

    id: str
    title: str
    type: str
    width: int
    is_tree: bool
    is_pinned: bool
    is_editable: bool
    is_primary: bool


@dataclass
class TableSchema:
    """Table schema as exposed by the server."""

    table_id: str
    name: str
    primary_key: str
    parent_key: str
    columns: list[ColumnInfo] = field(default_factory=list)

    def column(self, column_id: str) -> ColumnInfo | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None


@dataclass
class TableRow:
    """One row with plain Python cell values."""

    id: str
    parent_id: str | None
    cells: dict[str, Any] = field(default_factory=dict)


def from_proto_value(message: Any) -> Any:
    """Convert a tables.Value into a plain Python scalar.

    Raises:
        ValueError: If no oneof member is set (a missing value is not null)
    """
    kind = message.WhichOneof("kind")
    if kind is None:
        raise ValueError("Value is missing")
    if kind == "null_value":
        return None
    return getattr(message, kind)


class TableClient:
    """Async client for a TreeGrid server.

    Attributes:
        address: host:port of the server
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 50051,
        *,
        timeout: float | None = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            host: Server hostname
            port: Server port
            timeout: Per-RPC deadline in seconds (None for no deadline)
        """
        self.address = f"{host}:{port}"
        self._timeout = timeout
        self._channel: grpc_aio.Channel | None = None
        self._stub: TableServiceStub | None = None

    async def connect(self) -> None:
        """Open the channel."""
        if self._channel is not None:
            return
        self._channel = grpc_aio.insecure_channel(self.address)
        self._stub = TableServiceStub(self._channel)
        logger.debug(f"Connected to TreeGrid server at {self.address}")

    async def close(self) -> None:
        """Close the channel."""
        if self._channel:
            await self._channel.close()
            self._channel = None
            self._stub = None
            logger.debug("Disconnected from TreeGrid server")

    async def __aenter__(self) -> TableClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _call(self, method: str, request: Any, table_id: str | None = None) -> Any:
        if self._stub is None:
            raise RuntimeError("Not connected. Call connect() first.")
        try:
            return await getattr(self._stub, method)(request, timeout=self._timeout)
        except grpc_aio.AioRpcError as e:
            if e.code() == grpc.StatusCode.NOT_FOUND:
                raise NotFoundError(e.details() or "Table not found", "table", table_id or "")
            raise ConnectionError(
                f"{method} failed: {e.details()}",
                address=self.address,
                status=e.code().name,
            )

    async def list_tables(self) -> list[tuple[str, str]]:
        """Return (id, name) for every table."""
        response = await self._call("ListTables", pb.ListTablesRequest())
        return [(info.id, info.name) for info in response.tables]

    async def get_schema(self, table_id: str) -> TableSchema:
        """Fetch a table's schema.

        Raises:
            NotFoundError: If the table does not exist
        """
        response = await self._call("GetSchema", pb.GetSchemaRequest(table_id=table_id), table_id)
        schema = response.schema
        return TableSchema(
            table_id=schema.table_id,
            name=schema.name,
            primary_key=schema.primary_key,
            parent_key=schema.parent_key,
            columns=[
                ColumnInfo(
                    id=col.id,
                    title=col.title,
                    type=column_type_from_proto(col.type).value,
                    width=col.width,
                    is_tree=col.is_tree,
                    is_pinned=col.is_pinned,
                    is_editable=col.is_editable,
                    is_primary=col.is_primary,
                )
                for col in schema.columns
            ],
        )

    async def get_rows(self, table_id: str) -> list[TableRow]:
        """Fetch every row of a table.

        Raises:
            NotFoundError: If the table does not exist
        """
        response = await self._call("GetData", pb.GetDataRequest(table_id=table_id), table_id)
        return [
            TableRow(
                id=row.id,
                parent_id=row.parent_id if row.HasField("parent_id") else None,
                cells={
                    key: from_proto_value(val)
                    for key, val in row.cells.items()
                    # Unset values carry no content; the cell is left out
                    if val.WhichOneof("kind") is not None
                },
            )
            for row in response.rows
        ]

    async def update_cell(self, table_id: str, row_id: str, column_id: str, value: Any) -> None:
        """Write one cell.

        Args:
            table_id: Table handle
            row_id: Primary key of the row
            column_id: Column to write
            value: None, bool, int, float or str

        Raises:
            NotFoundError: If the table does not exist
            UpdateRejectedError: If the server refused the update
        """
        request = pb.UpdateCellRequest(table_id=table_id, row_id=row_id, column_id=column_id)
        encode_proto_value(Value.from_python(value), request.value)

        response = await self._call("UpdateCell", request, table_id)
        if not response.ok:
            raise UpdateRejectedError(
                response.error_message,
                code=response.error_code,
                table_id=table_id,
                row_id=row_id,
                column_id=column_id,
            )

    async def health(self) -> dict[str, Any]:
        response = await self._call("Health", pb.HealthRequest())
        return {
            "healthy": response.healthy,
            "version": response.version,
            "table_count": response.table_count,
        }
