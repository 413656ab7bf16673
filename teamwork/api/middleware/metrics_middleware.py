"""Request metrics middleware.

Counts requests and records latency per route template. Requests that
raise are counted as 500 before the exception propagates.
"""

import time
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

from teamwork.bootstrap.services import get_container


def route_template(request: Request) -> str | None:
    """Path template of the route serving ``request``, if any."""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return getattr(route, "path", None)
    return None


class MetricsMiddleware(BaseHTTPMiddleware):
    """Feeds ``http_requests_total`` and ``http_request_duration_seconds``."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        metrics = get_container().metrics
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            metrics.observe_request(
                method=request.method,
                route=route_template(request),
                status_code=status_code,
                duration=time.perf_counter() - started,
            )
