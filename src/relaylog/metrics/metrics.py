"""
Delivery metrics for remote log shipping.

Implements Prometheus-compatible counters for the batch dispatcher.

Design goals:
- Zero global state; every collector owns an isolated registry
- In-memory counters are always kept so tests can assert on them
- Safe no-op exporting when metrics are disabled by settings
- Synchronous recording: the dispatcher calls these from event-loop callbacks
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram


@dataclass
class DeliveryMetrics:
    """Captured delivery counters for quick assertions in tests."""

    batches_sent: int = 0
    records_delivered: int = 0
    delivery_errors: int = 0
    transport_failures: int = 0
    records_dropped: int = 0


class MetricsCollector:
    """Dispatcher-scoped metrics collector."""

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._state = DeliveryMetrics()

        self._c_batches: Any | None = None
        self._c_records: Any | None = None
        self._c_errors: Any | None = None
        self._c_dropped: Any | None = None
        self._h_batch_size: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            # Isolated registry avoids duplicate registration across instances
            self._registry = CollectorRegistry()
            self._c_batches = Counter(
                "relaylog_batches_sent_total",
                "Total number of batches handed to the remote sink",
                registry=self._registry,
            )
            self._c_records = Counter(
                "relaylog_records_delivered_total",
                "Total number of records acknowledged by the remote sink",
                registry=self._registry,
            )
            self._c_errors = Counter(
                "relaylog_delivery_errors_total",
                "Total number of failed deliveries",
                ["kind"],
                registry=self._registry,
            )
            self._c_dropped = Counter(
                "relaylog_records_dropped_total",
                "Total number of records discarded without delivery",
                registry=self._registry,
            )
            self._h_batch_size = Histogram(
                "relaylog_batch_size",
                "Number of records per delivered batch",
                buckets=(1, 2, 5, 10, 25, 50, 100, 250, 500),
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    def record_batch_sent(self, size: int) -> None:
        self._state.batches_sent += 1
        if self._c_batches is not None:
            self._c_batches.inc()
        if self._h_batch_size is not None:
            self._h_batch_size.observe(size)

    def record_batch_acknowledged(self, size: int) -> None:
        self._state.records_delivered += size
        if self._c_records is not None:
            self._c_records.inc(size)

    def record_delivery_error(self) -> None:
        """An application-level error string came back from the sink."""
        self._state.delivery_errors += 1
        if self._c_errors is not None:
            self._c_errors.labels(kind="application").inc()

    def record_transport_failure(self) -> None:
        self._state.transport_failures += 1
        if self._c_errors is not None:
            self._c_errors.labels(kind="transport").inc()

    def record_records_dropped(self, count: int = 1) -> None:
        self._state.records_dropped += count
        if self._c_dropped is not None:
            self._c_dropped.inc(count)

    def snapshot(self) -> DeliveryMetrics:
        return replace(self._state)
