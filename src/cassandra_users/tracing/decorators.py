"""Span decorator for storage calls."""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from opentelemetry.trace import SpanKind

T = TypeVar("T")


def traced_query(
    operation: str, statement: str
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap an async storage method in one client span per call.

    The decorated method must belong to an object exposing ``tracer`` and
    ``keyspace`` attributes. A failing call records the exception on the span,
    marks it ``ERROR`` and re-raises.

    Args:
        operation: Short operation name, e.g. ``"insert"``. The span is named
            ``cassandra.<operation>``.
        statement: The CQL statement executed by the method.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            attributes = {
                "db.system": "cassandra",
                "db.name": self.keyspace,
                "db.operation": operation,
                "db.statement": statement,
            }
            with self.tracer.start_as_current_span(
                f"cassandra.{operation}",
                kind=SpanKind.CLIENT,
                attributes=attributes,
            ):
                return await func(self, *args, **kwargs)

        return wrapper

    return decorator
