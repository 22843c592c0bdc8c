"""
Server-side receiver for shipped log records.

Each received record is re-emitted through the stdlib ``logging`` module under
a logger named after the record's category, so the server's normal logging
configuration decides where client logs end up.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from ..core import diagnostics
from ..core.levels import to_stdlib
from ..core.record import LogRecord

FAILURE_MESSAGE = "Remote logging failed, check stack trace for details."


class RemoteLoggingService:
    """Log client records locally.

    By default records are logged to a logger with the same name as the
    category that created them on the client. Set ``logger_name_override`` to
    send every client record to one logger instead.
    """

    def __init__(
        self,
        *,
        logger_name_override: str | None = None,
        logger_factory: Callable[[str], logging.Logger] = logging.getLogger,
    ) -> None:
        self._logger_name_override = logger_name_override
        self._logger_factory = logger_factory

    @property
    def logger_name_override(self) -> str | None:
        return self._logger_name_override

    def set_logger_name_override(self, override: str | None) -> None:
        self._logger_name_override = override

    def log_on_server(self, records: Sequence[LogRecord] | None) -> str | None:
        """Log every record; return the first error message, or None."""
        if records is None:
            return None
        first_error: str | None = None
        for record in records:
            error = self.log_record(record)
            if error is not None and first_error is None:
                first_error = error
        return first_error

    def log_record(self, record: LogRecord) -> str | None:
        """Log one record; return an error message if that failed."""
        try:
            self._emit(record)
        except Exception as exc:
            diagnostics.warn(
                "remote-service",
                "remote logging failed",
                category=record.category,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return FAILURE_MESSAGE
        return None

    def _emit(self, record: LogRecord) -> None:
        name = self._logger_name_override or record.category
        logger = self._logger_factory(name)
        levelno = to_stdlib(record.level)
        if not logger.isEnabledFor(levelno):
            return
        std_record = logger.makeRecord(
            name,
            levelno,
            "(remote)",
            0,
            record.message,
            (),
            None,
            extra={"remote_category": record.category},
        )
        std_record.created = record.timestamp
        std_record.msecs = (record.timestamp - int(record.timestamp)) * 1000
        if record.cause is not None:
            std_record.exc_text = (
                record.cause.stack or f"{record.cause.type}: {record.cause.message}"
            )
        logger.handle(std_record)
