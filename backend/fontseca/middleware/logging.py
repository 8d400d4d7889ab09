"""
fontseca.dev Backend — Access Log Middleware
==============================================

What:  Writes one Common Log Format line per request to the `fontseca.access`
       logger (stdout, plus `settings.access_log_file` when configured).
How:   Measures the time spent in the rest of the stack and formats:

    203.0.113.7 - - [17/Oct/2026:10:04:05 +0000] "POST /archive.articles.hide HTTP/1.1" 204 - in 1.234ms

    The body size is taken from the response Content-Length ("-" when
    unknown or zero). 5xx responses log at ERROR, 4xx at WARNING.
"""

import logging
import time
from datetime import datetime

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from fontseca.middleware.request_id import request_id_var

logger = logging.getLogger("fontseca.access")

CLF_TIME_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def format_latency(seconds: float) -> str:
    if seconds >= 60:
        return f"{int(seconds)}s"
    if seconds >= 1:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000:.3f}ms"


def common_log_line(
    client_ip: str,
    when: datetime,
    method: str,
    path: str,
    protocol: str,
    status: int,
    body_size: str,
    latency: float,
) -> str:
    if not body_size or body_size == "0":
        body_size = "-"
    return '%s - - [%s] "%s %s %s" %d %s in %s' % (
        client_ip,
        when.strftime(CLF_TIME_FORMAT),
        method,
        path,
        protocol,
        status,
        body_size,
        format_latency(latency),
    )


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs every request in Common Log Format."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        when = datetime.now().astimezone()

        response = await call_next(request)

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        logger.log(
            level,
            common_log_line(
                request.client.host if request.client else "-",
                when,
                request.method,
                path,
                f"HTTP/{request.scope.get('http_version', '1.1')}",
                status,
                response.headers.get("content-length", ""),
                time.perf_counter() - start_time,
            ),
            extra={"request_id": request_id_var.get("")},
        )
        return response
