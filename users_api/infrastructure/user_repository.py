"""User Repository — one SQL statement per operation against the `users` table.

Invariants:
    - Every method issues exactly one statement and commits (or rolls back) it
    - Every SQLAlchemyError or driver OSError (refused connection) becomes
      DatabaseError carrying the driver's text
    - get() treats "no row" as a database error; find() returns None instead
    - update() always assigns user_id = user_id, so an empty change set is a valid no-op

Design Decisions:
    - Values always travel as bound parameters generated by SQLAlchemy
    - update/delete skip ORM session synchronization; reads use populate_existing
      so a session reused across calls never serves stale rows
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.core.domain_types import UserId
from users_api.core.errors import DatabaseError
from users_api.infrastructure.database import (
    DB_ERRORS, describe_db_error, get_db, rollback_quietly,
)
from users_api.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _statement(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except DB_ERRORS as e:
            await rollback_quietly(self._db)
            message = describe_db_error(e)
            logger.error(
                f"DB {operation} failed: {message}",
                extra={"operation": operation},
            )
            raise DatabaseError(message, operation) from e

    async def list_all(self) -> list[User]:
        async with self._statement("list"):
            result = await self._db.execute(
                select(User).order_by(User.user_id)
                .execution_options(populate_existing=True),
            )
            return list(result.scalars().all())

    async def get(self, user_id: UserId) -> User:
        async with self._statement("get"):
            result = await self._db.execute(
                select(User).where(User.user_id == user_id)
                .execution_options(populate_existing=True),
            )
            return result.scalar_one()

    async def find(self, user_id: UserId) -> User | None:
        async with self._statement("get"):
            result = await self._db.execute(
                select(User).where(User.user_id == user_id)
                .execution_options(populate_existing=True),
            )
            return result.scalar_one_or_none()

    async def create(self, name: str, age: int | None) -> UserId:
        async with self._statement("insert"):
            user = User(name=name, age=age)
            self._db.add(user)
            await self._db.flush()
            user_id = UserId(user.user_id)
            await self._db.commit()
        logger.info("User created", extra={"user_id": user_id})
        return user_id

    async def update(self, user_id: UserId, changes: dict[str, object]) -> None:
        """Apply a partial update. Matching zero rows is not an error."""
        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values({"user_id": User.user_id, **changes})
            .execution_options(synchronize_session=False)
        )
        async with self._statement("update"):
            await self._db.execute(stmt)
            await self._db.commit()
        logger.info(
            f"User updated ({', '.join(changes) or 'no fields'})",
            extra={"user_id": user_id},
        )

    async def delete(self, user_id: UserId) -> None:
        """Delete by id. Deleting a missing row is not an error."""
        stmt = (
            delete(User)
            .where(User.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        async with self._statement("delete"):
            await self._db.execute(stmt)
            await self._db.commit()
        logger.info("User deleted", extra={"user_id": user_id})


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlUserRepository:
    """FastAPI dependency for the user repository."""
    return SqlUserRepository(db)
