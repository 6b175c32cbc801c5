"""Shared fixtures: an in-memory stand-in for the driver session and a wired app."""

from typing import Any

import pytest
from cassandra.cluster import NoHostAvailable
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter


def _unavailable() -> NoHostAvailable:
    return NoHostAvailable(
        "Unable to complete the operation against any hosts",
        {"127.0.0.1:9042": ConnectionRefusedError(111, "Connection refused")},
    )


class FakePreparedStatement:
    def __init__(self, query_string: str) -> None:
        self.query_string = query_string


class FakeResponseFuture:
    """Mimics ``ResponseFuture.add_callbacks`` for an already finished request."""

    def __init__(self, rows: Any = None, error: BaseException | None = None) -> None:
        self._rows = rows
        self._error = error

    def add_callbacks(self, callback, errback) -> None:
        if self._error is not None:
            errback(self._error)
        else:
            callback(self._rows)


class FakeSession:
    """Keeps ``users`` rows in a dict keyed by partition key."""

    def __init__(self) -> None:
        self.rows: dict[Any, dict[str, Any]] = {}
        self.prepared_queries: list[str] = []
        self.executed: list[tuple[str, tuple[Any, ...]]] = []
        self.available = True

    def prepare(self, query: str) -> FakePreparedStatement:
        if not self.available:
            raise _unavailable()
        self.prepared_queries.append(query)
        return FakePreparedStatement(query)

    def execute_async(self, statement: FakePreparedStatement, parameters: tuple[Any, ...]):
        if not self.available:
            return FakeResponseFuture(error=_unavailable())
        self.executed.append((statement.query_string, parameters))
        if statement.query_string.startswith("INSERT"):
            user_id, name = parameters
            self.rows[user_id] = {"id": user_id, "name": name}
            return FakeResponseFuture(None)
        (user_id,) = parameters
        row = self.rows.get(user_id)
        return FakeResponseFuture([dict(row)] if row is not None else [])


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter):
    from cassandra_users.config import ServiceSettings
    from cassandra_users.tracing import setup_tracing

    return setup_tracing(ServiceSettings(), exporter=span_exporter)


@pytest.fixture
def store(fake_session, tracer_provider):
    from cassandra_users.storage import UserStore

    return UserStore(fake_session, keyspace="test", tracer=tracer_provider.get_tracer("tests"))


@pytest.fixture
def app(store, tracer_provider):
    from cassandra_users.app import create_app
    from cassandra_users.config import ServiceSettings

    return create_app(ServiceSettings(), store, tracer_provider)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
