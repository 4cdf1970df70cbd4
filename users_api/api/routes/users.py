"""Users — CRUD routes over the `users` table.

Invariants:
    - One repository call (one SQL statement) per request
    - Success bodies are envelopes: {success: true, data?}
    - Database failures propagate as DatabaseError → 500 envelope (error_handlers.py)
    - PATCH and DELETE answer 200 whether or not a row matched

Design Decisions:
    - GET /users/{id} on a missing row is a 500 by default: the "no rows" condition
      is a database error like any other. USER_NOT_FOUND_STATUS_404 switches to 404.
    - Repository injected through Depends so tests can swap it
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from users_api.config import Settings, get_settings
from users_api.core.domain_types import INT4_MAX, INT4_MIN, UserId
from users_api.core.errors import ResourceNotFoundError
from users_api.core.repository_protocols import UserRepository
from users_api.infrastructure.user_repository import get_user_repository
from users_api.schemas.user import (
    CreateUserReq, CreateUserRow, DataEnvelope, SuccessEnvelope,
    UpdateUserReq, UserRow,
)

router = APIRouter(prefix="/users", tags=["users"])

UserIdPath = Annotated[int, Path(ge=INT4_MIN, le=INT4_MAX)]


@router.get("", response_model=DataEnvelope[list[UserRow]])
async def get_users(repo: UserRepository = Depends(get_user_repository)):
    """List every user, ascending by user_id."""
    rows = await repo.list_all()
    return DataEnvelope[list[UserRow]](
        data=[UserRow.model_validate(row) for row in rows],
    )


@router.get("/{user_id}", response_model=DataEnvelope[UserRow])
async def get_user(
    user_id: UserIdPath,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    if settings.user_not_found_status_404:
        row = await repo.find(UserId(user_id))
        if row is None:
            raise ResourceNotFoundError("User", str(user_id))
    else:
        row = await repo.get(UserId(user_id))
    return DataEnvelope[UserRow](data=UserRow.model_validate(row))


@router.post(
    "", response_model=DataEnvelope[CreateUserRow],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: CreateUserReq,
    repo: UserRepository = Depends(get_user_repository),
):
    user_id = await repo.create(body.name, body.age)
    return DataEnvelope[CreateUserRow](data=CreateUserRow(user_id=user_id))


@router.patch("/{user_id}", response_model=SuccessEnvelope)
async def update_user(
    body: UpdateUserReq,
    user_id: UserIdPath,
    repo: UserRepository = Depends(get_user_repository),
):
    """Partial update: only fields present (and non-null) in the body change."""
    await repo.update(UserId(user_id), body.changes())
    return SuccessEnvelope()


@router.delete("/{user_id}", response_model=SuccessEnvelope)
async def delete_user(
    user_id: UserIdPath,
    repo: UserRepository = Depends(get_user_repository),
):
    await repo.delete(UserId(user_id))
    return SuccessEnvelope()
