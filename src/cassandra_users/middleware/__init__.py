"""HTTP middleware."""

from cassandra_users.middleware.logging import RequestLoggingMiddleware
from cassandra_users.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware"]
