"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → {success: false, message} envelopes
    - Connection pool created on startup via lifespan and stored on app.state
    - Startup aborts if the database is unreachable

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Settings read inside the lifespan, not at import: importing the app never
      requires DATABASE_URL
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import root, users
from users_api.config import get_settings
from users_api.infrastructure.database import DatabaseSessionManager
from users_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        pool_timeout=settings.database_pool_timeout,
    )
    await db_manager.verify_connection()
    app.state.db_manager = db_manager
    logger.info("Users API started")
    try:
        yield
    finally:
        logger.info("Users API shutting down")
        await db_manager.close()


app = FastAPI(title="Users API", version="1.0.0", lifespan=lifespan)

# Routes — explicit registration
app.include_router(root.router)
app.include_router(users.router)

register_error_handlers(app)
