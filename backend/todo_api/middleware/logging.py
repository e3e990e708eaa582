"""
Todo REST Backend — Access Log Middleware
===========================================

What:  One line per todo API call on the `todo_api.access` logger.
How:   Names the store operation the request maps to and the todo ID it
       targets, so a line such as

           update todo=3 PUT /todos/3 -> 404 0.3ms [a1b2c3d4]

       can be read without knowing the route table. Titles and
       descriptions are user data and never logged.

/health is polled by Docker every few seconds and is not logged.
"""

import logging
import re
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_api.middleware.request_id import request_id_var

logger = logging.getLogger("todo_api.access")

_TODO_PATH = re.compile(r"/todos/(?P<todo_id>[^/]+)")

# (method, targets one todo) -> operation name
_OPERATIONS = {
    ("GET", False): "list",
    ("POST", False): "create",
    ("DELETE", False): "delete_all",
    ("GET", True): "get",
    ("PUT", True): "update",
    ("DELETE", True): "delete",
}

_UNLOGGED_PATHS = {"/health"}


def describe_request(method: str, path: str) -> Tuple[str, Optional[str]]:
    """
    Maps a request to (operation, todo_id).

    Paths outside /todos give ("-", None); a method the route does not
    accept gives "unsupported".
    """
    if path == "/todos":
        return _OPERATIONS.get((method, False), "unsupported"), None
    match = _TODO_PATH.fullmatch(path)
    if match:
        return _OPERATIONS.get((method, True), "unsupported"), match.group("todo_id")
    return "-", None


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        operation, todo_id = describe_request(request.method, path)
        target = f" todo={todo_id}" if todo_id is not None else ""
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s%s %s %s -> %d %.1fms [%s]",
            operation,
            target,
            request.method,
            path,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "todo_id": todo_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
