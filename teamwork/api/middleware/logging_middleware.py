"""Request logging middleware.

Opens a request log context (see ``request_context``), logs one line
when the request finishes and echoes the correlation id back in
``X-Correlation-ID``. Responses with a 5xx status are logged at error
level, 4xx at warning level.
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from teamwork.infrastructure.observability import CORRELATION_HEADER, request_context

logger = structlog.get_logger(__name__)

# Only logged when they fail.
QUIET_PATHS = frozenset({"/v1/health", "/v1/metrics"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Correlation id propagation and per-request access logging."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        with request_context(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            log = logger.bind(method=request.method, path=request.url.path)
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    duration_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                )
                raise

            response.headers[CORRELATION_HEADER] = correlation_id
            if request.url.path in QUIET_PATHS and response.status_code < 400:
                return response

            if response.status_code >= 500:
                emit = log.error
            elif response.status_code >= 400:
                emit = log.warning
            else:
                emit = log.info
            emit(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            return response
