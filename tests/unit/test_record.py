from __future__ import annotations

import dataclasses

import orjson
import pytest

from relaylog.core.errors import PayloadError
from relaylog.core.levels import Level
from relaylog.core.record import ErrorInfo, LogRecord
from relaylog.core.serialization import deserialize_batch, serialize_batch


def test_create_captures_exception_as_error_info() -> None:
    try:
        raise KeyError("missing")
    except KeyError as exc:
        record = LogRecord.create("error", "lookup failed", category="db", cause=exc)

    assert record.level is Level.ERROR
    assert record.cause is not None
    assert record.cause.type == "KeyError"
    assert "Traceback" in record.cause.stack
    assert record.timestamp > 0


def test_records_are_immutable() -> None:
    record = LogRecord.create(Level.INFO, "hi", category="app")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.message = "changed"  # type: ignore[misc]


def test_empty_category_rejected() -> None:
    with pytest.raises(ValueError):
        LogRecord.create(Level.INFO, "hi", category="")


def test_wire_mapping_uses_level_names() -> None:
    record = LogRecord.create(
        Level.FATAL,
        "down",
        category="ui",
        cause=ErrorInfo(type="TypeError", message="x is undefined"),
        timestamp=12.5,
    )
    data = record.to_dict()

    assert data["level"] == "ERROR"
    assert data["cause"] == {"type": "TypeError", "message": "x is undefined", "stack": ""}
    assert LogRecord.from_dict(data) == record


def test_batch_decoding_keeps_order_and_tolerates_null() -> None:
    records = [
        LogRecord.create(Level.INFO, f"m{i}", category="app", timestamp=float(i))
        for i in range(3)
    ]
    decoded = deserialize_batch(serialize_batch(records).data)

    assert [r.message for r in decoded or []] == ["m0", "m1", "m2"]
    assert deserialize_batch(b"null") is None
    assert deserialize_batch(b"[]") == []


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'{"level": "INFO"}',
        b"[1, 2]",
        orjson.dumps([{"level": "LOUD", "category": "a", "timestamp": 1}]),
        orjson.dumps([{"level": "INFO", "message": "no category", "timestamp": 1}]),
    ],
)
def test_malformed_batches_raise_payload_error(body: bytes) -> None:
    with pytest.raises(PayloadError):
        deserialize_batch(body)
