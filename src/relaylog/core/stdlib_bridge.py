"""
Bridge from the stdlib ``logging`` module into relaylog.

``enable_stdlib_bridge()`` installs a handler on a stdlib logger (the root
logger by default) that turns each ``logging.LogRecord`` into a relaylog
``LogRecord`` and publishes it to a dispatcher, a category logger, or anything
else with ``publish(record)``. Records emitted by ``relaylog.*`` loggers are
skipped so diagnostics about a failing delivery are never shipped through the
same delivery.
"""

from __future__ import annotations

import logging

from . import diagnostics
from .levels import from_stdlib
from .logger import RecordHandler
from .record import ErrorInfo, LogRecord

_INTERNAL_PREFIX = "relaylog"


class StdlibBridgeHandler(logging.Handler):
    """``logging.Handler`` publishing converted records to ``target``."""

    def __init__(self, target: RecordHandler, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self._target = target

    @staticmethod
    def _is_internal(name: str) -> bool:
        return name == _INTERNAL_PREFIX or name.startswith(_INTERNAL_PREFIX + ".")

    def convert(self, record: logging.LogRecord) -> LogRecord:
        cause: ErrorInfo | None = None
        if record.exc_info and record.exc_info[1] is not None:
            cause = ErrorInfo.from_exception(record.exc_info[1])
        return LogRecord.create(
            from_stdlib(record.levelno),
            record.getMessage(),
            category=record.name or "root",
            cause=cause,
            timestamp=record.created,
        )

    def emit(self, record: logging.LogRecord) -> None:
        if self._is_internal(record.name):
            return
        try:
            self._target.publish(self.convert(record))
        except Exception as exc:
            diagnostics.warn(
                "stdlib-bridge",
                "failed to forward record",
                logger=record.name,
                error=str(exc),
                _rate_limit_key="stdlib-bridge",
            )


def enable_stdlib_bridge(
    target: RecordHandler,
    *,
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
    remove_existing_handlers: bool = False,
) -> StdlibBridgeHandler:
    """Attach a bridge handler to ``logger`` (root by default) and return it."""
    std_logger = logger or logging.getLogger()
    if remove_existing_handlers:
        for existing in list(std_logger.handlers):
            std_logger.removeHandler(existing)
    handler = StdlibBridgeHandler(target, level=level)
    std_logger.addHandler(handler)
    if std_logger.level == logging.NOTSET or std_logger.level > level:
        std_logger.setLevel(level)
    return handler


def disable_stdlib_bridge(
    handler: StdlibBridgeHandler, *, logger: logging.Logger | None = None
) -> None:
    (logger or logging.getLogger()).removeHandler(handler)
