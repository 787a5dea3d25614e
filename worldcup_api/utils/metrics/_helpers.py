"""
Idempotent Prometheus metric registration.

Metric modules can be imported more than once (uvicorn --reload, test
collection). Registering the same name twice raises ValueError, so the
already registered collector is returned instead.
"""

from typing import Any, TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

MetricT = TypeVar("MetricT", Counter, Gauge, Histogram)


def _get_or_create(
    metric_class: type[MetricT],
    name: str,
    doc: str,
    labels: list[str] | None,
    **kwargs: Any,
) -> MetricT:
    try:
        return metric_class(name, doc, labels or [], **kwargs)
    except ValueError:
        # Counters are registered under both "x" and "x_total"
        return REGISTRY._names_to_collectors[name]


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    return _get_or_create(Counter, name, doc, labels)


def _get_or_create_gauge(
    name: str, doc: str, labels: list[str] | None = None
) -> Gauge:
    return _get_or_create(Gauge, name, doc, labels)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] | None = None,
) -> Histogram:
    """
    Get the registered histogram or create it.

    Args:
        name: Metric name.
        doc: Metric documentation.
        labels: Optional label names.
        buckets: Optional bucket boundaries; prometheus defaults otherwise.
    """
    if buckets:
        return _get_or_create(Histogram, name, doc, labels, buckets=buckets)
    return _get_or_create(Histogram, name, doc, labels)
