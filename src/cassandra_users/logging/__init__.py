"""Structured logging for the users service."""

from cassandra_users.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
