"""Database Session Manager — bounded async connection pool with automatic rollback.

Invariants:
    - Pool is fixed-size: pool_size connections, no overflow
    - Acquiring a connection waits at most pool_timeout seconds
    - Every session rolls back on exception and is always closed
    - The manager lives on app.state; nothing is stored at module level

Design Decisions:
    - Manager created in the FastAPI lifespan and injected through get_db
    - verify_connection() opens one connection at startup so a bad DATABASE_URL
      aborts the process instead of failing the first request
    - expire_on_commit=False: rows stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from users_api.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DB_ERRORS = (SQLAlchemyError, OSError)


def describe_db_error(exc: SQLAlchemyError | OSError) -> str:
    """Driver message when there is one, SQLAlchemy's own otherwise.

    asyncpg raises OSError (connection refused, DNS failure) straight through
    SQLAlchemy when no connection could be opened; its text is used as-is.
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


async def rollback_quietly(session: AsyncSession) -> None:
    """Roll back after a failure; a rollback that fails too is only logged."""
    try:
        await session.rollback()
    except DB_ERRORS as e:
        logger.warning(f"Rollback after failure also failed: {describe_db_error(e)}")


class DatabaseSessionManager:
    """Manages async database sessions over a bounded pool.

    Pass `engine` to wrap an engine built elsewhere (tests, scripts); the
    pool arguments are then ignored.
    """

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int = 10,
        pool_timeout: float = 5.0,
        *,
        engine: AsyncEngine | None = None,
    ):
        if engine is None:
            if database_url is None:
                raise ValueError("database_url or engine is required")
            engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=pool_timeout,
                pool_pre_ping=True,
            )
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await rollback_quietly(session)
            raise
        finally:
            await session.close()

    async def verify_connection(self) -> None:
        """Open one pooled connection; raise ConfigurationError if unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except DB_ERRORS as e:
            message = describe_db_error(e)
            logger.error(f"Can't connect to the database: {message}")
            raise ConfigurationError(
                f"Can't connect to the database: {message}",
            ) from e

    async def close(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
