# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request ID propagation and per-route Prometheus request metrics."""
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.metrics import HTTP_ERRORS, REQUEST_COUNT, REQUEST_LATENCY

logger = get_logger(__name__)

OPS_PATHS = frozenset({"/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc"})


def _route_template(request: Request) -> str:
    """Matched route pattern, e.g. ``/api/v1/complaints/{complaint_id}/preview``."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        if request.url.path not in OPS_PATHS:
            logger.info(
                "%s %s -> %d", request.method, request.url.path, response.status_code,
                extra={"request_id": request_id},
            )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path in OPS_PATHS:
            return await call_next(request)
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        endpoint = _route_template(request)
        status = str(response.status_code)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(elapsed)
        if response.status_code >= 400:
            HTTP_ERRORS.labels(method=request.method, endpoint=endpoint, status=status).inc()
        return response
