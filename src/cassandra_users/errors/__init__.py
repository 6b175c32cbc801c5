"""Error hierarchy for the users service."""

from cassandra_users.errors.exceptions import (
    StorageConnectionError,
    StorageError,
    UserNotFoundError,
    UserServiceError,
)

__all__ = [
    "StorageConnectionError",
    "StorageError",
    "UserNotFoundError",
    "UserServiceError",
]
