"""Prometheus metrics exposed by the bridge."""

from typing import Optional, Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from alertmanager2es import APPLICATION


class NotificationMetrics:
    """Counters for webhook notifications, owned by one application instance.

    Each instance gets its own registry so that several applications (e.g. in
    tests) never share totals.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.errored = Counter(
            "notifications_errored",
            "Total number of alert notifications that errored during processing and should be retried",
            namespace=APPLICATION,
            registry=self.registry,
        )
        self.invalid = Counter(
            "notifications_invalid",
            "Total number of invalid alert notifications received",
            namespace=APPLICATION,
            registry=self.registry,
        )
        self.received = Counter(
            "notifications_received",
            "Total number of alert notifications received",
            namespace=APPLICATION,
            registry=self.registry,
        )
        self.http_requests = Counter(
            "http_requests",
            "Total number of HTTP requests made.",
            labelnames=("handler", "method", "code"),
            registry=self.registry,
        )
        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "The HTTP request latencies in seconds.",
            labelnames=("handler",),
            registry=self.registry,
        )

    def observe_request(self, handler: str, method: str, code: int, duration: float) -> None:
        """Record one served HTTP request."""
        self.http_requests.labels(handler=handler, method=method.lower(), code=str(code)).inc()
        self.http_request_duration.labels(handler=handler).observe(duration)

    def render(self) -> Tuple[bytes, str]:
        """Return the exposition payload and its content type."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
