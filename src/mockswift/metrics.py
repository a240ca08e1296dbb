"""Prometheus metrics definitions for MockSwift.

All custom metrics use the ``mockswift_`` prefix. HTTP-level metrics
(request count, duration, sizes) come from
``prometheus-fastapi-instrumentator``; the ones here count Swift operations
and track the size of the in-memory store.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge

_initialized: bool = False

# ---------------------------------------------------------------------------
# Swift operation counter  (labels: operation, status)
# ---------------------------------------------------------------------------
swift_operations_total: Counter | None = None

# ---------------------------------------------------------------------------
# Store gauges
# ---------------------------------------------------------------------------
containers_total: Gauge | None = None
objects_total: Gauge | None = None

# ---------------------------------------------------------------------------
# Byte counters
# ---------------------------------------------------------------------------
bytes_received_total: Counter | None = None
bytes_sent_total: Counter | None = None


def init_metrics() -> None:
    """Create and register all Prometheus metrics.

    Safe to call more than once; collectors are registered in the global
    registry only on the first call.
    """
    global _initialized
    global swift_operations_total, containers_total, objects_total
    global bytes_received_total, bytes_sent_total

    if _initialized:
        return

    swift_operations_total = Counter(
        "mockswift_swift_operations_total",
        "Total Swift operations by type and outcome",
        ["operation", "status"],
    )

    containers_total = Gauge(
        "mockswift_containers_total",
        "Total number of containers across all accounts",
    )

    objects_total = Gauge(
        "mockswift_objects_total",
        "Total number of objects across all containers",
    )

    bytes_received_total = Counter(
        "mockswift_bytes_received_total",
        "Total bytes received in request bodies",
    )

    bytes_sent_total = Counter(
        "mockswift_bytes_sent_total",
        "Total bytes sent in response bodies",
    )

    _initialized = True


def record_operation(operation: str, status: int, containers: int, objects: int) -> None:
    """Count one Swift operation and refresh the store gauges.

    No-op until :func:`init_metrics` has run.
    """
    if not _initialized:
        return
    swift_operations_total.labels(operation=operation, status=str(status)).inc()
    containers_total.set(containers)
    objects_total.set(objects)
