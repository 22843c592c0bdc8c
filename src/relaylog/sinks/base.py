from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..core.record import LogRecord


@runtime_checkable
class RemoteSink(Protocol):
    """Receiving end of a batch dispatcher.

    ``log_on_server()`` gets the batch in publish order. It returns the first
    per-record error message, or ``None`` if every record was logged. Raising
    means the call itself could not complete (a transport failure), which
    permanently disables the dispatcher that issued it.
    """

    async def log_on_server(
        self, records: Sequence[LogRecord] | None
    ) -> str | None:  # pragma: no cover - structural protocol
        ...
