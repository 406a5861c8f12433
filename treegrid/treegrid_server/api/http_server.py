"""
HTTP server implementation for TreeGrid.

This module provides the JSON REST API. It mirrors the gRPC surface:

    GET     /api/tables                 -> [{"id", "name"}]
    GET     /api/table/{table_id}/schema -> schema object
    GET     /api/table/{table_id}/data   -> array of row records
    POST    /api/table/{table_id}/update -> {"status": "ok"}
    GET     /api/health                 -> health status
    OPTIONS /api/{tail}                 -> CORS preflight

Errors are returned as {"error": message, "error_code": kind}. Unknown
table, column or row is 404; every other rejection is 400.

Invariants:
    - HTTP endpoints have same semantics as gRPC
    - Handlers never hold a store lock across an await
    - JSON request/response format

How to change safely:
    - Keep endpoints in sync with proto/tables.proto
    - Map new ErrorKinds in _status_for
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from aiohttp import web

from ..codec.json_codec import (
    decode_json_value,
    encode_json_rows,
    encode_json_schema,
    encode_json_table_list,
    parse_json_body,
    parse_update_body,
)
from ..config import HttpConfig
from ..store.errors import ErrorKind, InvalidRequestError, TableStoreError
from .service import TableService

logger = logging.getLogger(__name__)


def _status_for(kind: ErrorKind) -> int:
    if kind.is_not_found:
        return 404
    return 400


def error_response(error: TableStoreError) -> web.Response:
    """Translate a table error into its JSON response."""
    return web.json_response(error.to_dict(), status=_status_for(error.kind))


def create_http_app(
    service: TableService,
    config: HttpConfig | None = None,
) -> web.Application:
    """Create an HTTP application for TreeGrid.

    Args:
        service: Shared TableService
        config: HTTP server configuration

    Returns:
        aiohttp Application instance
    """
    config = config or HttpConfig()
    app = web.Application()

    # Add routes
    app.router.add_get("/api/tables", partial(handle_list_tables, service=service))
    app.router.add_get("/api/table/{table_id}/schema", partial(handle_schema, service=service))
    app.router.add_get("/api/table/{table_id}/data", partial(handle_data, service=service))
    app.router.add_post("/api/table/{table_id}/update", partial(handle_update, service=service))
    app.router.add_get("/api/health", partial(handle_health, service=service))
    app.router.add_route("OPTIONS", "/api/{tail:.*}", handle_options)

    # Add CORS middleware
    @web.middleware
    async def cors_middleware(request: web.Request, handler: Callable) -> web.StreamResponse:
        try:
            response = await handler(request)
        except web.HTTPException as e:
            _add_cors_headers(request, e.headers, config)
            raise

        _add_cors_headers(request, response.headers, config)
        return response

    # Add error handler
    @web.middleware
    async def error_middleware(request: web.Request, handler: Callable) -> web.StreamResponse:
        try:
            return await handler(request)
        except web.HTTPException:
            raise
        except TableStoreError as e:
            return error_response(e)
        except Exception as e:
            logger.error(f"HTTP handler error: {e}", exc_info=True)
            return web.json_response(
                {"error": str(e), "error_code": "INTERNAL"},
                status=500,
            )

    # error_middleware runs inside CORS so error responses carry CORS headers too
    app.middlewares.append(cors_middleware)
    app.middlewares.append(error_middleware)

    return app


def _add_cors_headers(request: web.Request, headers: Any, config: HttpConfig) -> None:
    origin = request.headers.get("Origin")
    if "*" in config.cors_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in config.cors_origins:
        headers["Access-Control-Allow-Origin"] = origin
    headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    headers["Access-Control-Allow-Headers"] = "Content-Type"


async def handle_options(request: web.Request) -> web.Response:
    """Handle OPTIONS /api/{tail} - CORS preflight."""
    return web.Response()


async def handle_list_tables(request: web.Request, service: TableService) -> web.Response:
    """Handle GET /api/tables - List table handles and names."""
    return web.json_response(encode_json_table_list(service.list_tables()))


async def handle_schema(request: web.Request, service: TableService) -> web.Response:
    """Handle GET /api/table/{table_id}/schema - Get a table's columns."""
    table = service.resolve_table(request.match_info["table_id"])
    return web.json_response(encode_json_schema(table))


async def handle_data(request: web.Request, service: TableService) -> web.Response:
    """Handle GET /api/table/{table_id}/data - Get a table's rows."""
    table = service.resolve_table(request.match_info["table_id"])
    return web.json_response(encode_json_rows(table))


async def handle_update(request: web.Request, service: TableService) -> web.Response:
    """Handle POST /api/table/{table_id}/update - Update one cell."""
    table_id = request.match_info["table_id"]

    try:
        text = await request.text()
    except UnicodeDecodeError:
        raise InvalidRequestError("invalid json")
    body = parse_json_body(text)

    service.require_table(table_id)
    row_id, column_id, raw_value = parse_update_body(body)

    service.apply_update(table_id, row_id, column_id, raw_value, decode_json_value)
    return web.json_response({"status": "ok"})


async def handle_health(request: web.Request, service: TableService) -> web.Response:
    """Handle GET /api/health - Health check."""
    result = service.health()
    status = 200 if result.get("healthy") else 503
    return web.json_response(result, status=status)


class HttpServer:
    """aiohttp server wrapper for TreeGrid.

    Example:
        >>> server = HttpServer(service, HttpConfig(port=8083))
        >>> await server.start()
        >>> # Server is now running
        >>> await server.stop()
    """

    def __init__(self, service: TableService, config: HttpConfig | None = None) -> None:
        self.service = service
        self.config = config or HttpConfig()
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        """Start serving HTTP."""
        if self._runner is not None:
            logger.warning("HTTP server already running")
            return

        app = create_http_app(self.service, self.config)
        runner = web.AppRunner(app)
        await runner.setup()

        site = web.TCPSite(runner, self.config.host, self.config.port)
        await site.start()
        self._runner = runner

        logger.info(
            f"HTTP server running on http://{self.config.host}:{self.bound_port}",
            extra={"host": self.config.host, "port": self.bound_port},
        )

    async def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._runner is None:
            return

        logger.info("Stopping HTTP server")
        await self._runner.cleanup()
        self._runner = None

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    @property
    def bound_port(self) -> int | None:
        """Port actually bound (useful when configured with port 0)."""
        if self._runner is None or not self._runner.addresses:
            return None
        return self._runner.addresses[0][1]
