"""Service configuration."""

from cassandra_users.config.settings import ServiceSettings

__all__ = ["ServiceSettings"]
