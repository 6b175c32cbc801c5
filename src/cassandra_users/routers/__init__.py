"""HTTP routes."""

from cassandra_users.routers.users import router as users_router

__all__ = ["users_router"]
