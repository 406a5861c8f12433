"""
gRPC server implementation for TreeGrid.

This module provides the binary RPC surface (tables.TableService) on
grpc.aio. It translates protobuf messages to and from the store model
through the shared TableService.

Error policy:
    - Unknown table_id on any RPC aborts with StatusCode.NOT_FOUND
    - Every other UpdateCell failure returns ok=false with error_message
      and error_code (the ErrorKind name)

Invariants:
    - Same semantics as the HTTP surface
    - Handlers never hold a store lock across an await
    - All rejected updates are logged with structured context

How to change safely:
    - Add new RPCs without modifying existing ones
    - tables.proto is the contract; RPC methods here follow its names
"""

from __future__ import annotations

import logging
from typing import Any

import grpc
from grpc import aio as grpc_aio

from ..codec.proto_codec import decode_proto_value, fill_proto_rows, fill_proto_schema
from ..proto import tables_pb2 as pb
from ..proto import TableServiceServicer, add_TableServiceServicer_to_server
from ..store.errors import TableNotFoundError, TableStoreError
from .service import TableService

logger = logging.getLogger(__name__)


class TableServicer(TableServiceServicer):
    """gRPC service implementation for tables.TableService.

    Attributes:
        service: Shared TableService
    """

    def __init__(self, service: TableService) -> None:
        self.service = service

    async def _resolve_table(self, table_id: str, context: Any):
        try:
            return self.service.resolve_table(table_id)
        except TableNotFoundError as e:
            await context.abort(grpc.StatusCode.NOT_FOUND, e.message)

    async def ListTables(self, request: Any, context: Any) -> Any:
        response = pb.ListTablesResponse()
        for table_id, name in self.service.list_tables():
            response.tables.add(id=table_id, name=name)
        return response

    async def GetSchema(self, request: Any, context: Any) -> Any:
        table = await self._resolve_table(request.table_id, context)
        response = pb.GetSchemaResponse()
        fill_proto_schema(table, response.schema)
        return response

    async def GetData(self, request: Any, context: Any) -> Any:
        table = await self._resolve_table(request.table_id, context)
        response = pb.GetDataResponse()
        fill_proto_rows(table, response.rows)
        return response

    async def UpdateCell(self, request: Any, context: Any) -> Any:
        """Decode the tagged value for its column and apply the update."""
        try:
            self.service.require_table(request.table_id)
        except TableNotFoundError as e:
            await context.abort(grpc.StatusCode.NOT_FOUND, e.message)

        # An absent value message reads as an unset oneof -> MissingValue
        try:
            self.service.apply_update(
                request.table_id,
                request.row_id,
                request.column_id,
                request.value,
                decode_proto_value,
            )
        except TableStoreError as e:
            return pb.UpdateCellResponse(ok=False, error_message=e.message, error_code=e.code)

        return pb.UpdateCellResponse(ok=True)

    async def Health(self, request: Any, context: Any) -> Any:
        result = self.service.health()
        return pb.HealthResponse(
            healthy=result["healthy"],
            version=result["version"],
            table_count=result["table_count"],
        )


class GrpcServer:
    """gRPC server wrapper for TreeGrid.

    This class manages the gRPC server lifecycle including:
    - Server initialization
    - Service registration
    - Graceful shutdown

    Example:
        >>> server = GrpcServer(servicer, port=50051)
        >>> await server.start()
        >>> # Server is now running
        >>> await server.stop()
    """

    def __init__(
        self,
        servicer: TableServicer,
        host: str = "0.0.0.0",
        port: int = 50051,
        max_workers: int = 10,
        max_message_size: int = 64 * 1024 * 1024,
    ) -> None:
        """Initialize the gRPC server.

        Args:
            servicer: TableServicer instance
            host: Host to bind to
            port: Port to listen on (0 picks a free port)
            max_workers: Maximum concurrent RPCs
            max_message_size: Maximum send/receive message size in bytes
        """
        self.servicer = servicer
        self.host = host
        self.port = port
        self.max_workers = max_workers
        self.max_message_size = max_message_size
        self._server: grpc_aio.Server | None = None
        self._bound_port: int | None = None
        self._running = False

    async def start(self) -> None:
        """Start the gRPC server."""
        if self._running:
            logger.warning("Server already running")
            return

        server = grpc_aio.server(
            maximum_concurrent_rpcs=self.max_workers,
            options=[
                ("grpc.max_send_message_length", self.max_message_size),
                ("grpc.max_receive_message_length", self.max_message_size),
            ],
        )
        add_TableServiceServicer_to_server(self.servicer, server)
        self._bound_port = server.add_insecure_port(f"{self.host}:{self.port}")
        await server.start()

        self._server = server
        self._running = True
        logger.info(
            f"gRPC server listening on {self.host}:{self._bound_port}",
            extra={
                "host": self.host,
                "port": self._bound_port,
                "max_workers": self.max_workers,
            },
        )

    async def stop(self, grace_period: float = 5.0) -> None:
        """Stop the gRPC server gracefully.

        Args:
            grace_period: Time to wait for pending RPCs to complete
        """
        if not self._running:
            return

        logger.info("Stopping gRPC server")
        self._running = False

        if self._server:
            await self._server.stop(grace_period)
            self._server = None

    async def wait_for_termination(self) -> None:
        if self._server:
            await self._server.wait_for_termination()

    @property
    def is_running(self) -> bool:
        """Whether the server is running."""
        return self._running

    @property
    def bound_port(self) -> int | None:
        """Port actually bound (useful when configured with port 0)."""
        return self._bound_port
