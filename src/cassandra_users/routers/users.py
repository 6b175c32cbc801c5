"""User routes.

Handlers pass request data straight to the store. Storage failures propagate
as ``StorageError`` and are answered by the registered error handler.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import PlainTextResponse

from cassandra_users.errors import UserNotFoundError
from cassandra_users.storage import UserStore

router = APIRouter(prefix="/users", tags=["users"])


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


@router.post("", status_code=201, response_class=PlainTextResponse)
async def create_user(payload: Any = Body(None), store: UserStore = Depends(get_user_store)) -> str:
    # No type or presence checks: anything that is not a JSON object, including
    # a missing body, inserts null id and name.
    fields = payload if isinstance(payload, dict) else {}
    await store.insert_user(fields.get("id"), fields.get("name"))
    return "User created"


@router.get("/{user_id}")
async def get_user(user_id: str, store: UserStore = Depends(get_user_store)) -> dict[str, Any]:
    row = await store.get_user(user_id)
    if row is None:
        raise UserNotFoundError("no row for id", user_id=user_id)
    return row
