"""
Monitoring and observability utilities for the task service.

Provides:
- Prometheus metrics (HTTP requests, MCP tool calls, oracle calls)
- Request tracing (unique request IDs)
- Health information for the /health endpoint
"""
import re
import time
import uuid
import logging
from typing import Callable, Dict, Any
from contextvars import ContextVar

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_client import Counter, Histogram, Gauge, generate_latest

# Request context variable for tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# Prometheus metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_errors_total = Counter(
    'http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

mcp_tool_calls_total = Counter(
    'mcp_tool_calls_total',
    'Total number of MCP tool, prompt and resource calls',
    ['tool', 'outcome']
)

mcp_tool_call_duration_seconds = Histogram(
    'mcp_tool_call_duration_seconds',
    'MCP call duration in seconds',
    ['tool'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)
)

ai_oracle_calls_total = Counter(
    'ai_oracle_calls_total',
    'Total number of completion oracle calls',
    ['intent', 'outcome']
)

service_uptime_seconds = Gauge(
    'service_uptime_seconds',
    'Service uptime in seconds'
)

service_start_time = time.time()

logger = logging.getLogger(__name__)


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get('')


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


def record_tool_call(tool: str, outcome: str, duration: float) -> None:
    """Record one MCP call. ``outcome`` is 'success' or 'error'."""
    mcp_tool_calls_total.labels(tool=tool, outcome=outcome).inc()
    mcp_tool_call_duration_seconds.labels(tool=tool).observe(duration)


def record_oracle_call(intent: str, outcome: str) -> None:
    """Record one oracle call. ``outcome`` is 'success', 'fallback' or 'skipped'."""
    ai_oracle_calls_total.labels(intent=intent, outcome=outcome).inc()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware for collecting Prometheus metrics and request tracing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = new_request_id()
        set_request_id(request_id)

        endpoint = self._get_endpoint_path(request.url.path)
        start_time = time.time()
        service_uptime_seconds.set(time.time() - service_start_time)

        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": request.url.path,
                "endpoint": endpoint,
                "client_ip": request.client.host if request.client else None,
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            logger.error(
                "Request failed with exception",
                exc_info=True,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_seconds": duration,
                    "exception_type": type(e).__name__,
                }
            )
            http_errors_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code,
                error_type="exception"
            ).inc()
            raise

        status_code = response.status_code
        duration = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_seconds": duration,
            }
        )

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code
        ).observe(duration)

        if status_code >= 400:
            error_type = "client_error" if status_code < 500 else "server_error"
            http_errors_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code,
                error_type=error_type
            ).inc()

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Trace-ID"] = request_id
        return response

    @staticmethod
    def _get_endpoint_path(path: str) -> str:
        """Normalize endpoint path for metrics (replace numeric IDs)."""
        path = re.sub(r'/\d+', '/{id}', path)
        if len(path) > 100:
            path = path[:100]
        return path


def get_metrics() -> bytes:
    """Render all metrics in the Prometheus text format."""
    service_uptime_seconds.set(time.time() - service_start_time)
    return generate_latest()


def get_health_info(store, oracle_enabled: bool) -> Dict[str, Any]:
    """
    Build health information for the service.

    Args:
        store: Task store; must expose ping()
        oracle_enabled: Whether a completion oracle is configured

    Returns:
        Dictionary with overall status and per-component details
    """
    database_ok = store.ping()
    return {
        "status": "healthy" if database_ok else "unhealthy",
        "uptime_seconds": round(time.time() - service_start_time, 3),
        "components": {
            "database": {"status": "healthy" if database_ok else "unhealthy"},
            "ai_oracle": {"status": "configured" if oracle_enabled else "disabled"},
        },
    }
