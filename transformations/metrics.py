"""
Prometheus metrics for the transformation services.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry


class Metrics:
    """
    Centralized metrics for one transformation process.

    Each instance owns its registry so several apps can live in one
    interpreter (tests) without duplicate-collector errors.
    """

    def __init__(self, service_name: str, version: str, registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            registry=self.registry,
        )

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Transformation metrics
        self.events_received_total = Counter(
            "transform_events_received_total",
            "CloudEvents received",
            ["event_type"],
            registry=self.registry,
        )

        self.events_emitted_total = Counter(
            "transform_events_emitted_total",
            "CloudEvents replied or forwarded",
            ["event_type", "mode"],
            registry=self.registry,
        )

        self.decode_errors_total = Counter(
            "transform_decode_errors_total",
            "Inbound events rejected as malformed",
            registry=self.registry,
        )

        self.upstream_errors_total = Counter(
            "transform_upstream_errors_total",
            "Failed calls to external services",
            ["adapter"],
            registry=self.registry,
        )

        self.upstream_duration = Histogram(
            "transform_upstream_duration_seconds",
            "Duration of external service calls in seconds",
            ["adapter"],
            registry=self.registry,
        )

    def record_received(self, event_type: str):
        self.events_received_total.labels(event_type=event_type).inc()

    def record_emitted(self, event_type: str, mode: str):
        self.events_emitted_total.labels(event_type=event_type, mode=mode).inc()

    def record_upstream_error(self, adapter: str):
        self.upstream_errors_total.labels(adapter=adapter).inc()
