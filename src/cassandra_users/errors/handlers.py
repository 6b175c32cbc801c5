"""FastAPI exception handlers for users service errors."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from cassandra_users.errors.exceptions import UserServiceError

logger = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on a FastAPI application.

    Errors are answered with their ``public_message`` as a ``text/plain``
    body. Server-side failures are logged at error level with the traceback;
    client-facing outcomes such as a missing user are logged at info level.

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(UserServiceError)
    async def handle_user_service_error(request: Request, exc: UserServiceError) -> PlainTextResponse:
        if exc.status_code >= 500:
            logger.error(
                "application_error",
                error_code=exc.error_code,
                message=str(exc),
                path=request.url.path,
                exc_info=exc,
                **exc.context,
            )
        else:
            logger.info(
                "request_rejected",
                error_code=exc.error_code,
                message=str(exc),
                path=request.url.path,
                **exc.context,
            )
        return PlainTextResponse(exc.public_message, status_code=exc.status_code)
