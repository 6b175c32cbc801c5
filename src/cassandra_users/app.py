"""FastAPI application factory."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider

from cassandra_users import __version__
from cassandra_users.config import ServiceSettings
from cassandra_users.errors.handlers import register_error_handlers
from cassandra_users.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from cassandra_users.routers import users_router
from cassandra_users.storage import UserStore
from cassandra_users.tracing import shutdown_tracing

logger = structlog.get_logger()


def create_app(
    settings: ServiceSettings,
    store: UserStore,
    tracer_provider: TracerProvider | None = None,
) -> FastAPI:
    """Build the application around an already connected store.

    The store is exposed to handlers through ``app.state`` and the
    ``get_user_store`` dependency. On shutdown the store is closed and the
    tracer provider, when given, is flushed.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("service_started", service_name=settings.service_name, port=settings.port)
        yield
        logger.info("service_stopping", service_name=settings.service_name)
        store.shutdown()
        if tracer_provider is not None:
            shutdown_tracing(tracer_provider)

    app = FastAPI(title="Cassandra Users", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.user_store = store

    register_error_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.include_router(users_router)
    return app
