from __future__ import annotations

from relaylog.metrics.metrics import MetricsCollector


def test_disabled_collector_keeps_in_memory_counts() -> None:
    metrics = MetricsCollector(enabled=False)
    metrics.record_batch_sent(3)
    metrics.record_batch_acknowledged(3)
    metrics.record_records_dropped(2)

    snap = metrics.snapshot()
    assert metrics.registry is None
    assert (snap.batches_sent, snap.records_delivered, snap.records_dropped) == (1, 3, 2)


def test_enabled_collector_exports_prometheus_counters() -> None:
    metrics = MetricsCollector(enabled=True)
    metrics.record_batch_sent(4)
    metrics.record_batch_acknowledged(4)
    metrics.record_delivery_error()
    metrics.record_transport_failure()

    registry = metrics.registry
    assert registry is not None
    assert registry.get_sample_value("relaylog_batches_sent_total") == 1.0
    assert registry.get_sample_value("relaylog_records_delivered_total") == 4.0
    assert (
        registry.get_sample_value(
            "relaylog_delivery_errors_total", {"kind": "transport"}
        )
        == 1.0
    )
    assert registry.get_sample_value("relaylog_batch_size_sum") == 4.0


def test_snapshot_is_a_copy() -> None:
    metrics = MetricsCollector()
    snap = metrics.snapshot()
    metrics.record_delivery_error()

    assert snap.delivery_errors == 0
    assert metrics.snapshot().delivery_errors == 1
