"""
API module for TreeGrid server.

This module provides the external interfaces:
- gRPC server (tables.TableService)
- HTTP server (JSON REST API)

Both servers share the same TableService and DataStore.

Invariants:
    - Both surfaces decode values through the same coercion policy
    - Unknown tables are transport-level not-found on both surfaces

How to change safely:
    - gRPC changes must be backward compatible
    - HTTP endpoints should match gRPC semantics
"""

from .grpc_server import GrpcServer, TableServicer
from .http_server import HttpServer, create_http_app
from .service import TableService

__all__ = [
    "GrpcServer",
    "TableServicer",
    "HttpServer",
    "TableService",
    "create_http_app",
]
