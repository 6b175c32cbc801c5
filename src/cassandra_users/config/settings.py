"""Environment-based service configuration."""

import os
from dataclasses import dataclass, field

DEFAULT_PORT = 3000


@dataclass(frozen=True)
class ServiceSettings:
    """Immutable service configuration.

    Only ``port``, ``log_level`` and ``log_format`` are read from the
    environment. Storage and collector endpoints are fixed and can only be
    overridden by passing them explicitly.
    """

    service_name: str = "cassandra-service"
    host: str = "0.0.0.0"
    port: int = field(default_factory=lambda: int(os.getenv("PORT") or DEFAULT_PORT))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))

    contact_point: str = "127.0.0.1"
    local_datacenter: str = "datacenter1"
    keyspace: str = "test"

    otlp_endpoint: str = "http://localhost:4317"
    otlp_timeout: float = 5.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", self.log_level.upper())
