"""OpenTelemetry tracing for storage calls."""

from cassandra_users.tracing.decorators import traced_query
from cassandra_users.tracing.export import BackgroundSpanExporter
from cassandra_users.tracing.setup import setup_tracing, shutdown_tracing

__all__ = ["BackgroundSpanExporter", "setup_tracing", "shutdown_tracing", "traced_query"]
