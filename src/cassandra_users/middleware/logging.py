"""Request/response logging middleware."""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


def _route_template(request: Request) -> str | None:
    # Set by the router once a route matched, e.g. "/users/{user_id}".
    route = request.scope.get("route")
    return getattr(route, "path", None)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with the route template it was dispatched to.

    ``route`` groups requests by endpoint (``/users/{user_id}``) while
    ``path`` keeps the concrete URL. Only server errors are logged above info;
    a 404 for an unknown user is an expected outcome.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        logger.info("request_started", method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request_failed",
                method=request.method,
                route=_route_template(request),
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                exc_info=True,
            )
            raise

        log_method = logger.error if response.status_code >= 500 else logger.info
        log_method(
            "request_completed",
            method=request.method,
            route=_route_template(request),
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            client_ip=request.client.host if request.client else None,
        )
        return response
