"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    "jsonq_requests_total",
    "Total HTTP requests",
    labelnames=("endpoint", "method", "status"),
    registry=REGISTRY,
)

REQUEST_LATENCY = Histogram(
    "jsonq_request_latency_seconds",
    "Latency of HTTP requests",
    labelnames=("endpoint", "method"),
    registry=REGISTRY,
)

CACHE_HITS = Counter(
    "jsonq_cache_hits_total",
    "Query results served from the cache",
    registry=REGISTRY,
)

CACHE_MISSES = Counter(
    "jsonq_cache_misses_total",
    "Queries that required a file scan",
    registry=REGISTRY,
)

CACHE_EVICTIONS = Counter(
    "jsonq_cache_evictions_total",
    "Cache entries removed by capacity eviction or expiry",
    labelnames=("reason",),
    registry=REGISTRY,
)

CACHE_SIZE = Gauge(
    "jsonq_cache_entries",
    "Number of entries held in the result cache",
    registry=REGISTRY,
)

RECORDS_SCANNED = Counter(
    "jsonq_records_scanned_total",
    "Records read from JSON array files",
    labelnames=("operation",),
    registry=REGISTRY,
)

SCAN_DURATION = Histogram(
    "jsonq_scan_duration_seconds",
    "Duration of full-file query scans",
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "CACHE_HITS",
    "CACHE_MISSES",
    "CACHE_EVICTIONS",
    "CACHE_SIZE",
    "RECORDS_SCANNED",
    "SCAN_DURATION",
    "metrics_response",
]
