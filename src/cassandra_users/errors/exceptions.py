"""Structured exception hierarchy for the users service."""

from typing import Any


class UserServiceError(Exception):
    """Base exception for all users service errors.

    Attributes:
        status_code: HTTP status code returned when this error escapes a handler.
        public_message: Plain-text body sent to the client. The exception
            message itself is only logged.
        error_code: Machine-readable error identifier used in logs.
        context: Arbitrary key-value pairs logged alongside the error.
    """

    status_code: int = 500
    public_message: str = "Internal Server Error"

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", **context: Any) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context


class StorageError(UserServiceError):
    """A storage operation (prepare, insert or lookup) failed."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="STORAGE_ERROR", **context)


class StorageConnectionError(UserServiceError):
    """The initial connection to the cluster could not be established."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="STORAGE_CONNECTION_ERROR", **context)


class UserNotFoundError(UserServiceError):
    """A lookup returned no rows."""

    status_code: int = 404
    public_message: str = "User not found"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, error_code="USER_NOT_FOUND", **context)
