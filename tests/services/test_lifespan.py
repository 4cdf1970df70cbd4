"""Startup & Pool — lifespan wiring, connection checks and the entry point.

Invariants:
    - Lifespan stores the session manager on app.state and disposes it on exit
    - An unreachable database aborts startup with ConfigurationError
    - Missing DATABASE_URL exits before the server binds
"""

import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import create_async_engine

import users_api.__main__ as entry
import users_api.infrastructure.database as db_module
import users_api.main as main_module
from users_api.core.errors import ConfigurationError
from users_api.infrastructure.database import DatabaseSessionManager


def _manager_for(engine) -> DatabaseSessionManager:
    return DatabaseSessionManager(engine=engine)


async def test_verify_connection_succeeds(test_engine):
    await _manager_for(test_engine).verify_connection()


async def test_verify_connection_unreachable_database():
    engine = create_async_engine(
        "sqlite+aiosqlite:////nonexistent-dir/users.db",
    )
    manager = _manager_for(engine)
    with pytest.raises(ConfigurationError, match="Can't connect to the database"):
        await manager.verify_connection()
    await engine.dispose()


async def test_session_rolls_back_and_reraises(test_engine):
    manager = _manager_for(test_engine)
    with pytest.raises(RuntimeError):
        async with manager.session():
            raise RuntimeError("handler failed")


def test_manager_builds_bounded_pool(monkeypatch):
    captured = {}
    real_create = db_module.create_async_engine

    def _create(url, **kwargs):
        captured.update(kwargs)
        return real_create(url, **kwargs)

    monkeypatch.setattr(db_module, "create_async_engine", _create)

    manager = DatabaseSessionManager(
        "postgresql+asyncpg://u:p@localhost:5432/users",
        pool_size=10, pool_timeout=5.0,
    )

    assert captured["pool_size"] == 10
    assert captured["max_overflow"] == 0
    assert captured["pool_timeout"] == 5.0
    assert manager.engine.pool.size() == 10


def test_manager_requires_url_or_engine():
    with pytest.raises(ValueError):
        DatabaseSessionManager()


class _FakeManager:
    def __init__(self, database_url, pool_size, pool_timeout):
        self.database_url = database_url
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self.closed = False

    async def verify_connection(self):
        if "unreachable" in self.database_url:
            raise ConfigurationError("Can't connect to the database: refused")

    async def close(self):
        self.closed = True


async def test_lifespan_stores_and_closes_manager(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/users")
    monkeypatch.setattr(main_module, "DatabaseSessionManager", _FakeManager)
    monkeypatch.setattr(main_module, "setup_logging", lambda *a: None)
    app = FastAPI()

    async with main_module.lifespan(app):
        manager = app.state.db_manager
        assert manager.database_url == "postgresql+asyncpg://u:p@db:5432/users"
        assert manager.pool_size == 10
        assert manager.pool_timeout == 5.0

    assert manager.closed is True


async def test_lifespan_aborts_when_database_unreachable(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@unreachable:5432/users")
    monkeypatch.setattr(main_module, "DatabaseSessionManager", _FakeManager)
    monkeypatch.setattr(main_module, "setup_logging", lambda *a: None)
    app = FastAPI()

    with pytest.raises(ConfigurationError):
        async with main_module.lifespan(app):
            pass
    assert not hasattr(app.state, "db_manager")


def test_entry_point_exits_without_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.chdir("/")
    with pytest.raises(SystemExit, match="DATABASE_URL|database_url"):
        entry.main()


def test_entry_point_runs_uvicorn_on_listen_address(monkeypatch):
    calls = {}
    monkeypatch.setenv("SERVER_ADDRESS", "0.0.0.0:8080")
    monkeypatch.setattr(entry, "setup_logging", lambda *a: None)
    monkeypatch.setattr(
        entry.uvicorn, "run", lambda app, **kw: calls.update(app=app, **kw),
    )

    entry.main()

    assert calls["host"] == "0.0.0.0"
    assert calls["port"] == 8080
    assert calls["app"] is main_module.app
