"""Process entry point — `python -m users_api` or the `users-api` script.

Invariants:
    - Missing DATABASE_URL or a malformed SERVER_ADDRESS exits before binding
    - uvicorn owns the listener; one asyncio task per request
"""

import logging

import uvicorn
from pydantic import ValidationError

from users_api.config import get_settings
from users_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        settings = get_settings()
        host, port = settings.listen_address()
    except (ValidationError, ValueError) as e:
        raise SystemExit(f"Invalid configuration: {e}")

    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting users API on http://%s:%s", host, port)

    from users_api.main import app

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
