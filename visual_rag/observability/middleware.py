"""
Request middleware.

CorrelationMiddleware binds the X-Correlation-ID for the request and echoes
it on the response. RequestLoggingMiddleware writes one access line per
request with its duration; image payloads make /analyze slow, so the
duration is also returned as X-Process-Time-Ms.

Dependencies: starlette, visual_rag.observability
System role: Request/response observability
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from visual_rag.observability.correlation import clear_correlation_id, set_correlation_id
from visual_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/api/v1/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        path = request.url.path
        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{request.method} {path} - unhandled {type(e).__name__}",
                e,
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)
        log_with_context(
            logger,
            logging.DEBUG if path in QUIET_PATHS else logging.INFO,
            f"{request.method} {path} -> {response.status_code} ({duration_ms} ms)",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            client=request.client.host if request.client else None,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
