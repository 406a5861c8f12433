"""
Integration tests for the Server orchestrator and logging setup.
"""

import json
import logging

import json_log_formatter
import pytest

from sdk.treegrid_sdk import TableClient
from treegrid.treegrid_server.config import (
    GrpcConfig,
    HttpConfig,
    ObservabilityConfig,
    ServerConfig,
)
from treegrid.treegrid_server.main import Server, setup_logging


def _local_config(grpc_enabled=True, http_enabled=True):
    return ServerConfig(
        grpc=GrpcConfig(enabled=grpc_enabled, bind_address="127.0.0.1:0"),
        http=HttpConfig(enabled=http_enabled, host="127.0.0.1", port=0),
    )


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestServer:
    """Tests for Server start/stop."""

    @pytest.mark.asyncio
    async def test_start_both_listeners(self):
        server = Server(_local_config())
        await server.start(wait=False)
        try:
            assert server.grpc_server.is_running
            assert server.http_server.is_running

            async with TableClient("127.0.0.1", server.grpc_server.bound_port, timeout=10.0) as client:
                await client.update_cell("employees", "1", "salary", 600000)

            # Same store behind both listeners
            table = server.store.get_table("employees")
            assert table.find_row("1").get("salary").data == 600000.0
        finally:
            await server.stop()

        assert not server.grpc_server.is_running
        assert not server.http_server.is_running

    @pytest.mark.asyncio
    async def test_disabled_listener_not_started(self):
        server = Server(_local_config(grpc_enabled=False))
        await server.start(wait=False)
        try:
            assert server.grpc_server is None
            assert server.http_server.is_running
        finally:
            await server.stop()

    @pytest.mark.asyncio
    async def test_request_shutdown_unblocks_start(self):
        server = Server(_local_config(http_enabled=False))
        server.request_shutdown()
        await server.start()
        await server.stop()
        assert not server.grpc_server.is_running

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self):
        server = Server(_local_config())
        await server.stop()
        assert server.grpc_server is None


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_format(self, restore_logging):
        setup_logging(ServerConfig(observability=ObservabilityConfig(log_level="DEBUG")))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        formatter = root.handlers[0].formatter
        assert isinstance(formatter, json_log_formatter.JSONFormatter)

        record = logging.LogRecord("t", logging.INFO, __file__, 1, "Cell updated", None, None)
        record.table_id = "employees"
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "Cell updated"
        assert payload["table_id"] == "employees"

    def test_text_format(self, restore_logging):
        setup_logging(ServerConfig(observability=ObservabilityConfig(log_format="text")))
        formatter = logging.getLogger().handlers[0].formatter
        assert not isinstance(formatter, json_log_formatter.JSONFormatter)
        assert logging.getLogger().level == logging.INFO
