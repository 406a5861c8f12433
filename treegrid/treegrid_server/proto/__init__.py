# mypy: ignore-errors
"""Protobuf messages and gRPC bindings for the TreeGrid wire contract.

tables.proto next to this file is the only definition of the contract.
It is compiled in-process on first import (grpc.protos_and_services,
backed by grpcio-tools), which registers the usual protoc modules:

- treegrid.treegrid_server.proto.tables_pb2: message classes and enums
- treegrid.treegrid_server.proto.tables_pb2_grpc: stub, servicer base,
  add_TableServiceServicer_to_server

PROTO_PATH must be resolvable from an entry on sys.path (the project root
or site-packages).
"""

import grpc

PROTO_PATH = "treegrid/treegrid_server/proto/tables.proto"

tables_pb2, tables_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

SERVICE_NAME = tables_pb2.DESCRIPTOR.services_by_name["TableService"].full_name

# Enums
ColumnType = tables_pb2.ColumnType
COLUMN_TYPE_UNSPECIFIED = tables_pb2.COLUMN_TYPE_UNSPECIFIED
COLUMN_TYPE_STRING = tables_pb2.COLUMN_TYPE_STRING
COLUMN_TYPE_NUMBER = tables_pb2.COLUMN_TYPE_NUMBER
COLUMN_TYPE_CURRENCY = tables_pb2.COLUMN_TYPE_CURRENCY
COLUMN_TYPE_BOOL = tables_pb2.COLUMN_TYPE_BOOL

# Values
Value = tables_pb2.Value

# Tables
TableInfo = tables_pb2.TableInfo
ListTablesRequest = tables_pb2.ListTablesRequest
ListTablesResponse = tables_pb2.ListTablesResponse

# Schema
Column = tables_pb2.Column
TableSchema = tables_pb2.TableSchema
GetSchemaRequest = tables_pb2.GetSchemaRequest
GetSchemaResponse = tables_pb2.GetSchemaResponse

# Data
Row = tables_pb2.Row
GetDataRequest = tables_pb2.GetDataRequest
GetDataResponse = tables_pb2.GetDataResponse

# Update
UpdateCellRequest = tables_pb2.UpdateCellRequest
UpdateCellResponse = tables_pb2.UpdateCellResponse

# Health
HealthRequest = tables_pb2.HealthRequest
HealthResponse = tables_pb2.HealthResponse

# gRPC
TableServiceStub = tables_pb2_grpc.TableServiceStub
TableServiceServicer = tables_pb2_grpc.TableServiceServicer
add_TableServiceServicer_to_server = tables_pb2_grpc.add_TableServiceServicer_to_server

__all__ = [
    "PROTO_PATH",
    "SERVICE_NAME",
    "tables_pb2",
    "tables_pb2_grpc",
    # Enums
    "ColumnType",
    "COLUMN_TYPE_UNSPECIFIED",
    "COLUMN_TYPE_STRING",
    "COLUMN_TYPE_NUMBER",
    "COLUMN_TYPE_CURRENCY",
    "COLUMN_TYPE_BOOL",
    # Values
    "Value",
    # Tables
    "TableInfo",
    "ListTablesRequest",
    "ListTablesResponse",
    # Schema
    "Column",
    "TableSchema",
    "GetSchemaRequest",
    "GetSchemaResponse",
    # Data
    "Row",
    "GetDataRequest",
    "GetDataResponse",
    # Update
    "UpdateCellRequest",
    "UpdateCellResponse",
    # Health
    "HealthRequest",
    "HealthResponse",
    # gRPC
    "TableServiceStub",
    "TableServiceServicer",
    "add_TableServiceServicer_to_server",
]
