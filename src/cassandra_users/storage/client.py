"""Cassandra-backed user storage.

``UserStore`` issues two prepared statements against the ``users`` table. The
driver's callback-based ``execute_async`` is bridged into asyncio so request
handlers suspend while the cluster responds. Nothing here retries, overrides
timeouts or reconnects; the driver defaults apply as-is.
"""

import asyncio
from typing import Any

import structlog
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile, Session
from cassandra.policies import DCAwareRoundRobinPolicy
from cassandra.query import PreparedStatement, dict_factory
from opentelemetry.trace import Tracer

from cassandra_users.config import ServiceSettings
from cassandra_users.errors import StorageConnectionError, StorageError
from cassandra_users.tracing import traced_query

logger = structlog.get_logger()

INSERT_USER = "INSERT INTO users (id, name) VALUES (?, ?)"
SELECT_USER = "SELECT * FROM users WHERE id = ?"


def _resolve(future: asyncio.Future, rows: Any) -> None:
    if not future.done():
        future.set_result(rows)


def _reject(future: asyncio.Future, exc: BaseException) -> None:
    if not future.done():
        future.set_exception(exc)


def _call_on_loop(loop: asyncio.AbstractEventLoop, callback: Any, *args: Any) -> None:
    # The loop may have closed while the driver was still waiting on the
    # cluster; nobody is left to receive the result.
    try:
        loop.call_soon_threadsafe(callback, *args)
    except RuntimeError:
        logger.debug("storage_result_dropped", reason="event loop closed")


class UserStore:
    """Point reads and upserts of user rows.

    Args:
        session: A connected driver session whose default row factory yields
            dicts.
        keyspace: Keyspace the session is bound to; recorded on spans.
        tracer: Tracer used by ``traced_query`` for one span per call.
        cluster: Owning cluster, shut down by :meth:`shutdown`.
    """

    def __init__(
        self,
        session: Session,
        keyspace: str,
        tracer: Tracer,
        cluster: Cluster | None = None,
    ) -> None:
        self._session = session
        self._cluster = cluster
        self._prepared: dict[str, PreparedStatement] = {}
        self.keyspace = keyspace
        self.tracer = tracer

    @traced_query("insert", INSERT_USER)
    async def insert_user(self, user_id: Any, name: Any) -> None:
        """Write a user row. An existing row with the same id is overwritten."""
        await self._execute(INSERT_USER, (user_id, name))

    @traced_query("select", SELECT_USER)
    async def get_user(self, user_id: Any) -> dict[str, Any] | None:
        """Return the first row keyed by ``user_id``, or ``None``."""
        rows = await self._execute(SELECT_USER, (user_id,))
        return rows[0] if rows else None

    def shutdown(self) -> None:
        if self._cluster is not None:
            self._cluster.shutdown()
            logger.info("storage_disconnected")

    async def _execute(self, query: str, parameters: tuple[Any, ...]) -> list[dict[str, Any]]:
        try:
            prepared = await self._prepare(query)
            rows = await self._submit(prepared, parameters)
        except Exception as exc:
            raise StorageError(f"query failed: {exc}", query=query) from exc
        return list(rows or [])

    async def _prepare(self, query: str) -> PreparedStatement:
        prepared = self._prepared.get(query)
        if prepared is None:
            # Session.prepare blocks until every connected host has the statement.
            prepared = await asyncio.to_thread(self._session.prepare, query)
            self._prepared[query] = prepared
        return prepared

    def _submit(self, prepared: PreparedStatement, parameters: tuple[Any, ...]) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        result = loop.create_future()

        # Driver callbacks run on the driver's event-loop thread.
        def on_success(rows: Any) -> None:
            _call_on_loop(loop, _resolve, result, rows)

        def on_error(exc: BaseException) -> None:
            _call_on_loop(loop, _reject, result, exc)

        response = self._session.execute_async(prepared, parameters)
        response.add_callbacks(on_success, on_error)
        return result


def connect_user_store(settings: ServiceSettings, tracer: Tracer) -> UserStore:
    """Connect to the cluster and return a ready ``UserStore``.

    Raises:
        StorageConnectionError: The contact point is unreachable or the
            keyspace cannot be used.
    """
    profile = ExecutionProfile(
        load_balancing_policy=DCAwareRoundRobinPolicy(local_dc=settings.local_datacenter),
        row_factory=dict_factory,
    )
    cluster = Cluster(
        contact_points=[settings.contact_point],
        execution_profiles={EXEC_PROFILE_DEFAULT: profile},
    )
    try:
        session = cluster.connect(settings.keyspace)
    except Exception as exc:
        cluster.shutdown()
        raise StorageConnectionError(
            f"failed to connect to cassandra: {exc}",
            contact_point=settings.contact_point,
            keyspace=settings.keyspace,
        ) from exc

    logger.info(
        "storage_connected",
        contact_point=settings.contact_point,
        local_datacenter=settings.local_datacenter,
        keyspace=settings.keyspace,
    )
    return UserStore(session, keyspace=settings.keyspace, tracer=tracer, cluster=cluster)
