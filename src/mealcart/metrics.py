"""Prometheus metrics definitions for Mealcart."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "mealcart_http_requests_total",
    "Total number of HTTP requests processed by the Mealcart API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "mealcart_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Mealcart API",
    ["method", "path"],
)

ANSWERS_RENDERED = Counter(
    "mealcart_answers_rendered_total",
    "Model answers rendered, by presentation mode, shape and extraction tier",
    ["mode", "shape", "extraction"],
)

UPSTREAM_FAILURES = Counter(
    "mealcart_upstream_failures_total",
    "Completion service calls that failed, by provider",
    ["provider"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "ANSWERS_RENDERED",
    "UPSTREAM_FAILURES",
]
