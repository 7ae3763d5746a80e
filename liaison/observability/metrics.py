"""Prometheus metrics for Liaison."""

from prometheus_client import Counter, Histogram, start_http_server

RELATIONSHIP_ENSURE_COUNT = Counter(
    "liaison_relationship_ensure_total",
    "Total ensure_relationship calls by outcome",
    labelnames=["outcome"],
)

RELATIONSHIP_ENSURE_LATENCY = Histogram(
    "liaison_relationship_ensure_latency_seconds",
    "Latency of ensure_relationship including the storage round-trip",
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

STORE_ERRORS = Counter(
    "liaison_store_errors_total",
    "Owner store failures by backend and error type",
    labelnames=["backend", "error_type"],
)


def setup_metrics(enabled: bool = True, port: int = 9090) -> bool:
    """Expose the default registry over HTTP.

    Metrics are registered on import whether or not they are served.

    Returns:
        True if the exporter was started
    """
    if not enabled:
        return False
    start_http_server(port)
    return True
