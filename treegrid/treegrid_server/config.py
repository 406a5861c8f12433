"""
Configuration management for TreeGrid Server.

All configuration is done via environment variables - no config files.
This module provides typed configuration classes with validation.

Invariants:
    - All settings have sensible defaults for local development
    - At least one listener (gRPC or HTTP) must be enabled

How to change safely:
    - Add new settings with defaults that maintain backward compatibility
    - Document new variables in the class docstrings
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

LOG_FORMATS = ("json", "text")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


@dataclass(frozen=True)
class GrpcConfig:
    """gRPC server configuration.

    Attributes:
        enabled: Whether to start the gRPC listener (GRPC_ENABLED)
        bind_address: Address to bind gRPC server, host:port (GRPC_BIND)
        max_workers: Maximum concurrent RPCs (GRPC_MAX_WORKERS)
        max_message_size: Maximum message size in bytes (GRPC_MAX_MESSAGE_SIZE)
    """

    enabled: bool = True
    bind_address: str = "0.0.0.0:50051"
    max_workers: int = 10
    max_message_size: int = 64 * 1024 * 1024  # 64MB

    @classmethod
    def from_env(cls) -> GrpcConfig:
        """Load configuration from environment variables."""
        return cls(
            enabled=_env_bool("GRPC_ENABLED", "true"),
            bind_address=os.getenv("GRPC_BIND", "0.0.0.0:50051"),
            max_workers=_env_int("GRPC_MAX_WORKERS", "10"),
            max_message_size=_env_int("GRPC_MAX_MESSAGE_SIZE", str(64 * 1024 * 1024)),
        )

    @property
    def host(self) -> str:
        return self.bind_address.rsplit(":", 1)[0]

    @property
    def port(self) -> int:
        return int(self.bind_address.rsplit(":", 1)[1])


@dataclass(frozen=True)
class HttpConfig:
    """HTTP server configuration.

    Attributes:
        enabled: Whether to start the HTTP listener (HTTP_ENABLED)
        host: Host to bind (HTTP_HOST)
        port: Port to listen on (HTTP_PORT)
        cors_origins: Allowed CORS origins, comma separated (CORS_ORIGINS)
    """

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8083
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> HttpConfig:
        """Load configuration from environment variables."""
        origins = tuple(
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        )
        return cls(
            enabled=_env_bool("HTTP_ENABLED", "true"),
            host=os.getenv("HTTP_HOST", "0.0.0.0"),
            port=_env_int("HTTP_PORT", "8083"),
            cors_origins=origins or ("*",),
        )


@dataclass(frozen=True)
class ObservabilityConfig:
    """Logging configuration.

    Attributes:
        log_level: Logging level, DEBUG/INFO/WARNING/ERROR (LOG_LEVEL)
        log_format: Log format, json or text (LOG_FORMAT)
    """

    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> ObservabilityConfig:
        """Load configuration from environment variables."""
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json").lower(),
        )


@dataclass
class ServerConfig:
    """Complete server configuration.

    Attributes:
        grpc: gRPC server configuration
        http: HTTP server configuration
        observability: Logging configuration
    """

    grpc: GrpcConfig = field(default_factory=GrpcConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Load complete configuration from environment variables.

        Returns:
            ServerConfig with all sections populated from environment.

        Raises:
            ValueError: If configuration is missing or invalid.
        """
        config = cls(
            grpc=GrpcConfig.from_env(),
            http=HttpConfig.from_env(),
            observability=ObservabilityConfig.from_env(),
        )

        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration consistency.

        Raises:
            ValueError: If configuration is invalid.
        """
        if not self.grpc.enabled and not self.http.enabled:
            raise ValueError("At least one of GRPC_ENABLED or HTTP_ENABLED must be true")

        host, sep, port = self.grpc.bind_address.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(
                f"Invalid GRPC_BIND '{self.grpc.bind_address}'. Expected host:port"
            )
        if not 0 <= int(port) <= 65535:
            raise ValueError(f"GRPC_BIND port out of range: {port}")

        if not 0 <= self.http.port <= 65535:
            raise ValueError(f"HTTP_PORT out of range: {self.http.port}")

        if self.grpc.max_workers < 1:
            raise ValueError("GRPC_MAX_WORKERS must be >= 1")

        if self.observability.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid LOG_FORMAT '{self.observability.log_format}'. "
                f"Must be one of: {', '.join(LOG_FORMATS)}"
            )

    def log_config(self) -> None:
        """Log the effective configuration."""
        logger.info(
            "Server configuration loaded",
            extra={
                "grpc_enabled": self.grpc.enabled,
                "grpc_bind": self.grpc.bind_address,
                "grpc_max_workers": self.grpc.max_workers,
                "http_enabled": self.http.enabled,
                "http_bind": f"{self.http.host}:{self.http.port}",
                "cors_origins": list(self.http.cors_origins),
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
            },
        )
