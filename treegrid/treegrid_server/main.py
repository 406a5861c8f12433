"""
TreeGrid Server - Main entry point.

This module starts the TreeGrid server with all components:
- DataStore populated from the built-in seed tables
- gRPC server (tables.TableService)
- HTTP server (JSON REST API)

Usage:
    python -m treegrid.treegrid_server.main
    treegrid-server

Configuration is entirely via environment variables.
See config.py for all available settings.

Invariants:
    - One DataStore instance is shared by both listeners
    - Graceful shutdown stops both listeners before exit

How to change safely:
    - Add new components with enable/disable flags
    - Test shutdown sequence thoroughly
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

import json_log_formatter

from .api import GrpcServer, HttpServer, TableService, TableServicer
from .config import ServerConfig
from .store import DataStore

logger = logging.getLogger(__name__)


def setup_logging(config: ServerConfig) -> None:
    """Configure logging based on configuration.

    Args:
        config: Server configuration
    """
    level = getattr(logging, config.observability.log_level.upper(), logging.INFO)

    if config.observability.log_format == "json":
        formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # Reduce noise from libraries
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)


class Server:
    """TreeGrid Server orchestrator.

    Manages the lifecycle of all server components:
    - DataStore
    - gRPC server
    - HTTP server

    Attributes:
        config: Server configuration
        store: Shared table store
        service: Protocol-neutral service used by both listeners

    Example:
        >>> server = Server()
        >>> await server.start()
        >>> # Server is running
        >>> await server.stop()
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        store: DataStore | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            config: Optional server configuration (loaded from env if not provided)
            store: Optional pre-built store (seeded store if not provided)
        """
        self.config = config or ServerConfig.from_env()
        self.store = store or DataStore.from_seed()
        self.service = TableService(self.store)
        self._running = False
        self._shutdown_event = asyncio.Event()

        # Components (initialized in start())
        self.grpc_server: GrpcServer | None = None
        self.http_server: HttpServer | None = None

    async def start(self, wait: bool = True) -> None:
        """Start the server and all components.

        Args:
            wait: Block until request_shutdown() is called
        """
        if self._running:
            logger.warning("Server already running")
            return

        logger.info("Starting TreeGrid server")
        self.config.log_config()

        try:
            if self.config.grpc.enabled:
                self.grpc_server = GrpcServer(
                    servicer=TableServicer(self.service),
                    host=self.config.grpc.host,
                    port=self.config.grpc.port,
                    max_workers=self.config.grpc.max_workers,
                    max_message_size=self.config.grpc.max_message_size,
                )
                await self.grpc_server.start()

            if self.config.http.enabled:
                self.http_server = HttpServer(self.service, self.config.http)
                await self.http_server.start()

            self._running = True
            logger.info(
                "TreeGrid server started successfully",
                extra={"tables": self.store.table_ids},
            )

        except Exception as e:
            logger.error(f"Server startup failed: {e}", exc_info=True)
            await self._stop_components()
            raise

        if wait:
            # Wait for shutdown signal
            await self._shutdown_event.wait()

    async def stop(self) -> None:
        """Stop the server gracefully."""
        if not self._running:
            return

        logger.info("Stopping TreeGrid server")
        await self._stop_components()
        self._running = False
        logger.info("TreeGrid server stopped")

    async def _stop_components(self) -> None:
        if self.http_server:
            await self.http_server.stop()

        if self.grpc_server:
            await self.grpc_server.stop()

    def request_shutdown(self) -> None:
        """Request graceful shutdown."""
        self._shutdown_event.set()


def main() -> None:
    """Main entry point."""
    # Load configuration
    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    # Create server inside the loop it will run on
    server = Server(config)

    def handle_signal(sig: int) -> None:
        logger.info(f"Received signal {sig}, initiating shutdown")
        server.request_shutdown()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal, sig)

    # Run server
    try:
        loop.run_until_complete(server.start())
    except KeyboardInterrupt:
        pass
    finally:
        loop.run_until_complete(server.stop())
        loop.close()


if __name__ == "__main__":
    main()
