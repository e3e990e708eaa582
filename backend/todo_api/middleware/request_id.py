"""
Todo REST Backend — Request ID Middleware
===========================================

What:  Tags each request with an ID that shows up in every log line it
       produces and in the X-Request-ID response header.
How:   A client-supplied X-Request-ID is accepted after trimming; a blank,
       over-long or oddly-charactered one is replaced by a fresh 8-char ID so
       callers cannot smuggle arbitrary text into the access log.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Letters, digits and the separators UUIDs and trace IDs use
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]+")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """Returns the trimmed client ID when it is usable, otherwise a new one."""
    if header_value is None:
        return new_request_id()
    candidate = header_value.strip()
    if (
        not candidate
        or len(candidate) > MAX_REQUEST_ID_LENGTH
        or not _VALID_REQUEST_ID.fullmatch(candidate)
    ):
        return new_request_id()
    return candidate


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
