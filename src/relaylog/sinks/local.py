from __future__ import annotations

from typing import Sequence

from ..core.record import LogRecord
from ..server.service import RemoteLoggingService


class InProcessSink:
    """Remote sink that hands batches straight to a ``RemoteLoggingService``.

    Useful when client and receiver share a process, and in tests.
    """

    name = "in-process"

    def __init__(self, service: RemoteLoggingService | None = None) -> None:
        self._service = service or RemoteLoggingService()

    @property
    def service(self) -> RemoteLoggingService:
        return self._service

    async def log_on_server(self, records: Sequence[LogRecord] | None) -> str | None:
        return self._service.log_on_server(records)
