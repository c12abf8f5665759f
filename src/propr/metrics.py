"""Prometheus instrumentation for dispatched requests."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
    "propr_requests_total",
    "Total Prepr API requests",
    ["mode", "outcome"],
)
REQUEST_LATENCY = Histogram(
    "propr_request_latency_seconds",
    "Prepr API transport latency",
    ["mode"],
)


def record_request(mode: str, outcome: str) -> None:
    REQUEST_COUNTER.labels(mode=mode, outcome=outcome).inc()


__all__ = ["REQUEST_COUNTER", "REQUEST_LATENCY", "record_request"]
