"""Process entry point.

Builds settings, logging, tracing and the storage connection once, then
serves the application with uvicorn. A failed storage connection ends the
process with exit status 1 before the listen socket is bound.
"""

import sys

import structlog
import uvicorn

from cassandra_users.app import create_app
from cassandra_users.config import ServiceSettings
from cassandra_users.errors import StorageConnectionError
from cassandra_users.logging import setup_logging
from cassandra_users.storage import connect_user_store
from cassandra_users.tracing import setup_tracing, shutdown_tracing

logger = structlog.get_logger()


def main() -> None:
    settings = ServiceSettings()
    setup_logging(settings.service_name, settings.log_level, settings.log_format)

    tracer_provider = setup_tracing(settings)
    try:
        store = connect_user_store(settings, tracer_provider.get_tracer("cassandra_users.storage"))
    except StorageConnectionError as exc:
        logger.critical(
            "storage_connection_failed",
            message=str(exc),
            exc_info=exc,
            **exc.context,
        )
        shutdown_tracing(tracer_provider)
        sys.exit(1)

    app = create_app(settings, store, tracer_provider)
    logger.info("server_starting", host=settings.host, port=settings.port)
    # log_config=None keeps uvicorn on the root handler installed above.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
