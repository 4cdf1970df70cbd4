"""Logging Setup — one-line JSON records for the users API, or plain text locally.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Request context (user_id, operation, error_code, path, method) appears
      only when the caller passed it via `extra`
    - setup_logging() replaces its own handler, so both __main__ and the
      lifespan may call it without duplicating output

Design Decisions:
    - Formatter built on the stdlib logging module: uvicorn's loggers propagate
      to the root handler (log_config=None) and share the same format
    - LOG_FORMAT=text for terminals, json for anything collecting stdout
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "operation", "error_code", "path", "method")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_MARKER = "_users_api_handler"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key])
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the users API handler on the root logger."""
    for handler in list(logging.root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logging.root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    setattr(handler, _HANDLER_MARKER, True)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
