"""Prometheus metrics for Web API calls."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

CALL_COUNTER = Counter(
    "slack_web_api_calls_total",
    "Web API calls by final outcome",
    ["method", "outcome"],
)
ATTEMPT_COUNTER = Counter("slack_web_api_attempts_total", "HTTP exchanges attempted", ["method"])
RATE_LIMITED_COUNTER = Counter("slack_web_api_rate_limited_total", "HTTP 429 responses received", ["method"])
REQUEST_LATENCY = Histogram(
    "slack_web_api_request_latency_seconds",
    "Latency of single HTTP exchanges",
    ["method"],
)


def record_outcome(method: str, outcome: str) -> None:
    CALL_COUNTER.labels(method=method, outcome=outcome).inc()


__all__ = [
    "CALL_COUNTER",
    "ATTEMPT_COUNTER",
    "RATE_LIMITED_COUNTER",
    "REQUEST_LATENCY",
    "record_outcome",
]
