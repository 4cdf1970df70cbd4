"""Liveness — plain-text root endpoint.

Invariants:
    - GET / always returns 200 "Up and Running" if the process is up
    - Never touches the database
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def up_and_running():
    return "Up and Running"
