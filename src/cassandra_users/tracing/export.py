"""Span exporter that keeps network export off the caller's thread."""

from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor

import structlog
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

logger = structlog.get_logger()


def _log_export_outcome(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.warning("span_export_failed", exc_info=exc)
    elif future.result() is not SpanExportResult.SUCCESS:
        logger.warning("span_export_failed", result=future.result().name)


class BackgroundSpanExporter(SpanExporter):
    """Hand every export to a single worker thread.

    Spans still leave one batch at a time and in order, but ending a span on
    the event loop only enqueues the work. A slow or unreachable collector
    delays the worker, never the loop.

    Args:
        exporter: The exporter that talks to the collector.
    """

    def __init__(self, exporter: SpanExporter) -> None:
        self.exporter = exporter
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="span-export")
        self._shutdown = False

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if self._shutdown:
            return SpanExportResult.FAILURE
        future = self._executor.submit(self.exporter.export, spans)
        future.add_done_callback(_log_export_outcome)
        return SpanExportResult.SUCCESS

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        if self._shutdown:
            return True
        try:
            self._executor.submit(lambda: None).result(timeout=timeout_millis / 1000)
        except TimeoutError:
            return False
        return self.exporter.force_flush(timeout_millis)

    def shutdown(self) -> None:
        if self._shutdown:
            return
        self._shutdown = True
        self._executor.shutdown(wait=True)
        self.exporter.shutdown()
