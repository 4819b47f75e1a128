"""
Middleware for observability features.
"""
import uuid
import time
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import structlog

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add correlation IDs to all requests.

    - Uses the X-Correlation-ID header if present
    - Falls back to the inbound CloudEvent id (ce-id), then a new UUID
    - Binds correlation ID to structlog context
    - Adds correlation ID to response headers
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = (
            request.headers.get("x-correlation-id")
            or request.headers.get("ce-id")
            or str(uuid.uuid4())
        )
        correlation_id_var.set(correlation_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            http_method=request.method,
            http_path=request.url.path,
        )

        response = await call_next(request)
        response.headers["x-correlation-id"] = correlation_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect HTTP metrics for Prometheus.

    - Records request count by method, path, status
    - Records request duration histogram
    - Tracks active requests
    """

    def __init__(self, app, metrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint to avoid recursion
        if request.url.path.startswith("/metrics"):
            return await call_next(request)

        self.metrics.http_requests_active.inc()
        start_time = time.time()
        logger = structlog.get_logger()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            logger.info(
                "http_request",
                http_status=status,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            return response

        except Exception as e:
            logger.error(
                "http_request_error",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise

        finally:
            duration = time.time() - start_time
            self.metrics.http_requests_total.labels(
                service=self.metrics.service_name,
                method=request.method,
                path=request.url.path,
                status=status,
            ).inc()
            self.metrics.http_request_duration.labels(
                service=self.metrics.service_name,
                method=request.method,
                path=request.url.path,
            ).observe(duration)
            self.metrics.http_requests_active.dec()
