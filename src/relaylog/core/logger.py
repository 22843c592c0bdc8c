"""
Per-category loggers and the registry the facade routes through.
"""

from __future__ import annotations

from typing import Callable, Iterable, Protocol, runtime_checkable

from .levels import Level, parse_level
from .record import ErrorInfo, LogRecord


@runtime_checkable
class RecordHandler(Protocol):
    """Anything that accepts finished records, e.g. ``BatchDispatcher``."""

    def publish(self, record: LogRecord) -> None:  # pragma: no cover
        ...


class CategoryLogger:
    """Named logger with a threshold and a list of attached handlers."""

    def __init__(
        self,
        name: str,
        *,
        level: Level | int | str = Level.DEBUG,
        handlers: Iterable[RecordHandler] = (),
        enabled: Callable[[], bool] | None = None,
    ) -> None:
        if not name:
            raise ValueError("Logger name cannot be empty")
        self.name = name
        self._level = parse_level(level)
        self._handlers: list[RecordHandler] = list(handlers)
        self._enabled = enabled

    @property
    def level(self) -> Level:
        return self._level

    def set_level(self, level: Level | int | str) -> None:
        self._level = parse_level(level)

    @property
    def handlers(self) -> tuple[RecordHandler, ...]:
        return tuple(self._handlers)

    def add_handler(self, handler: RecordHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def remove_handler(self, handler: RecordHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def is_enabled(self, level: Level) -> bool:
        if self._enabled is not None and not self._enabled():
            return False
        return level >= self._level

    def log(
        self,
        level: Level,
        message: str,
        cause: BaseException | ErrorInfo | None = None,
    ) -> LogRecord | None:
        """Build a record and hand it to every handler.

        Returns the record, or None if ``level`` is not enabled.
        """
        if not self.is_enabled(level):
            return None
        record = LogRecord.create(level, message, category=self.name, cause=cause)
        for handler in self._handlers:
            handler.publish(record)
        return record

    def publish(self, record: LogRecord) -> None:
        """Hand an already-built record to the handlers if its level is enabled.

        Lets a category logger stand in as a ``RecordHandler``, e.g. as the
        target of the stdlib bridge. The record keeps its own category.
        """
        if not self.is_enabled(record.level):
            return
        for handler in self._handlers:
            handler.publish(record)

    def trace(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.TRACE, message, cause)

    def debug(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.DEBUG, message, cause)

    def info(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.INFO, message, cause)

    def warn(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.WARN, message, cause)

    def error(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.ERROR, message, cause)

    def fatal(self, message: str, cause: BaseException | None = None) -> None:
        self.log(Level.FATAL, message, cause)


class LoggerRegistry:
    """Category name to logger map with get-or-create lookup."""

    def __init__(self, factory: Callable[[str], CategoryLogger]) -> None:
        self._factory = factory
        self._loggers: dict[str, CategoryLogger] = {}

    def get(self, category: str) -> CategoryLogger:
        logger = self._loggers.get(category)
        if logger is None:
            logger = self._factory(category)
            self._loggers[category] = logger
        return logger

    def find(self, category: str) -> CategoryLogger | None:
        """Return the registered logger for ``category`` without creating one."""
        return self._loggers.get(category)

    def add(self, logger: CategoryLogger) -> None:
        self._loggers[logger.name] = logger

    def clear(self) -> None:
        self._loggers.clear()

    def names(self) -> list[str]:
        return sorted(self._loggers)

    def __contains__(self, category: object) -> bool:
        return category in self._loggers

    def __len__(self) -> int:
        return len(self._loggers)
