"""Tracer provider bootstrap.

The provider built here is handed to the storage client explicitly; it is
never registered as the process-wide global provider.
"""

import structlog
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExporter

from cassandra_users.config import ServiceSettings
from cassandra_users.tracing.export import BackgroundSpanExporter

logger = structlog.get_logger()


def setup_tracing(settings: ServiceSettings, exporter: SpanExporter | None = None) -> TracerProvider:
    """Build a tracer provider that exports each span as soon as it ends.

    Args:
        settings: Supplies the service name and the collector endpoint.
        exporter: Overrides the default OTLP/gRPC exporter, e.g. with an
            in-memory exporter in tests. It is used as given; wrap it in
            ``BackgroundSpanExporter`` to export off the calling thread.

    Returns:
        The configured ``TracerProvider``.
    """
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.service_name}))
    if exporter is None:
        exporter = BackgroundSpanExporter(
            OTLPSpanExporter(
                endpoint=settings.otlp_endpoint,
                insecure=True,
                timeout=settings.otlp_timeout,
            )
        )
    # SimpleSpanProcessor logs and drops export failures, so a missing
    # collector never fails a request. The OTLP exporter runs on its own
    # worker thread so its retries never hold up the event loop.
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    logger.info(
        "tracing_configured",
        service_name=settings.service_name,
        exporter=type(exporter).__name__,
    )
    return provider


def shutdown_tracing(provider: TracerProvider) -> None:
    """Flush pending spans and shut the provider down."""
    provider.shutdown()
    logger.info("tracing_shutdown")
