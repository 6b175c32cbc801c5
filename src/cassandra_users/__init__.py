"""Cassandra Users - HTTP API for creating and fetching user rows in Cassandra."""

__version__ = "0.1.0"

from cassandra_users.config import ServiceSettings
from cassandra_users.errors import (
    StorageConnectionError,
    StorageError,
    UserNotFoundError,
    UserServiceError,
)
from cassandra_users.logging import get_logger, setup_logging

__all__ = [
    "ServiceSettings",
    "StorageConnectionError",
    "StorageError",
    "UserNotFoundError",
    "UserServiceError",
    "get_logger",
    "setup_logging",
]
