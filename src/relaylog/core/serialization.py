"""
JSON wire encoding for record batches.

Batches travel as a JSON array of record mappings, encoded with orjson. The
bytes are exposed directly so the HTTP sink can post them without another
copy. A JSON ``null`` body decodes to ``None`` (the service tolerates it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import orjson

from .errors import PayloadError
from .record import LogRecord


@dataclass
class SerializedView:
    """A lightweight container exposing the encoded bytes."""

    data: bytes

    @property
    def view(self) -> memoryview:
        return memoryview(self.data)

    def __bytes__(self) -> bytes:
        return self.data


def serialize_mapping(payload: Any) -> SerializedView:
    """Serialize a JSON-compatible object; non-string keys are coerced."""
    return SerializedView(
        data=orjson.dumps(payload, option=orjson.OPT_NON_STR_KEYS, default=str)
    )


def serialize_batch(records: Iterable[LogRecord]) -> SerializedView:
    return serialize_mapping([record.to_dict() for record in records])


def deserialize_batch(data: bytes | bytearray | memoryview) -> list[LogRecord] | None:
    """Decode a batch body.

    Raises:
        PayloadError: If the body is not JSON, not an array, or holds an
            invalid record.
    """
    try:
        parsed = orjson.loads(bytes(data))
    except orjson.JSONDecodeError as exc:
        raise PayloadError(f"Batch is not valid JSON: {exc}") from exc
    if parsed is None:
        return None
    if not isinstance(parsed, list):
        raise PayloadError("Batch must be a JSON array")
    records: list[LogRecord] = []
    for item in parsed:
        if not isinstance(item, dict):
            raise PayloadError("Batch items must be JSON objects")
        records.append(LogRecord.from_dict(item))
    return records
