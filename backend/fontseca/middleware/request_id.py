"""
fontseca.dev Backend — Request ID Middleware
==============================================

What:  Tags every request with a short correlation ID and echoes it back in
       the `X-Request-ID` response header.
How:   A client-supplied `X-Request-ID` is reused when it looks like an ID
       (1-64 characters of letters, digits, "-" and "_"); otherwise a new one
       is generated. The ID is stored in a ContextVar so any log call made
       while handling the request can include it.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

_ACCEPTABLE_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")

# Coroutine-local: concurrent requests share the thread but not the value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns (or accepts) a correlation ID for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(HEADER, "").strip()
        if not _ACCEPTABLE_ID.fullmatch(rid):
            rid = new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[HEADER] = rid
        return response
