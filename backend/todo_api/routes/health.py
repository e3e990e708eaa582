"""
Todo REST Backend — Index and Health Check Routes
===================================================

What:  GET / greets API clients; GET /health reports service status.
Who:   / is hit by humans and smoke tests; /health by Docker health checks
       and load balancers.

The store lives in memory, so there is no external dependency to probe:
health reports the todo count and whether the CSV mirror is active.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from todo_api import __version__
from todo_api.dependencies import get_todo_service
from todo_api.schemas.todo import HealthResponse
from todo_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

WELCOME_MESSAGE = "Welcome to the Todo REST API!\n"

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Welcome message",
)
async def index() -> str:
    return WELCOME_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    service: TodoService = Depends(get_todo_service),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        todo_count=service.store.count,
        file_persistence=service.store.file_persistence,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
