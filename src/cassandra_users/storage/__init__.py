"""Cassandra storage client."""

from cassandra_users.storage.client import UserStore, connect_user_store

__all__ = ["UserStore", "connect_user_store"]
