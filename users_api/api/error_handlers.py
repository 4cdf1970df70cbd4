"""Error Handlers — turn every failure into a {success: false, message} envelope.

Invariants:
    - Clients only ever see one failure shape; validation adds a `details` list
    - UsersApiError keeps its own status: 500 for database errors (driver text
      included), 404 for a missing user when that mode is on
    - RequestValidationError → 400; bad path ids, bodies and JSON all land here
    - Anything else → 500 with a fixed message; the exception is logged, not echoed

Design Decisions:
    - Handlers registered from one function so main.py and the tests build
      identical apps
    - Request method and path go into the log record as extras, so a JSON log
      line alone identifies the failing call
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from users_api.core.errors import UsersApiError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
INVALID_REQUEST_MESSAGE = "Invalid request data"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(UsersApiError, handle_users_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def failure(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


def _request_extras(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


async def handle_users_api_error(request: Request, exc: UsersApiError):
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, **_request_extras(request)},
    )
    return failure(exc.http_status, exc.to_response()["message"])


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", **_request_extras(request)},
    )
    return failure(
        status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE, details=details,
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", **_request_extras(request)},
    )
    return failure(
        status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE,
    )
