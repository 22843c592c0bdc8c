"""
Application-facing logging facade.

A ``LogFacade`` owns the category registry and forwards leveled calls to the
matching ``CategoryLogger``. Build one per application (``build_facade()``
wires it from settings) and pass it around; there is no module-level
singleton.

Example:
    >>> facade = LogFacade()
    >>> facade.info("page loaded")
    >>> facade.warn("slow response", category="net")
    >>> if facade.is_debug_enabled():
    ...     facade.debug(expensive_dump())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .core.levels import Level, parse_level
from .core.logger import CategoryLogger, LoggerRegistry, RecordHandler
from .core.record import ErrorInfo, LogRecord
from .core.settings import Settings

if TYPE_CHECKING:
    from .core.dispatcher import BatchDispatcher

Cause = BaseException | ErrorInfo | None


class LogFacade:
    """Route ``(category, level, message, cause)`` calls to category loggers."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        handlers: Iterable[RecordHandler] = (),
    ) -> None:
        cfg = (settings or Settings()).core
        self._default_category = cfg.default_category
        self._default_level = parse_level(cfg.log_level)
        self._logging_enabled = cfg.logging_enabled
        self._handlers: list[RecordHandler] = list(handlers)
        self._registry = LoggerRegistry(self._create_logger)
        # Set by build_facade() when remote delivery is wired
        self.dispatcher: BatchDispatcher | None = None

    @property
    def default_category(self) -> str:
        return self._default_category

    def _create_logger(self, category: str) -> CategoryLogger:
        return CategoryLogger(
            category,
            level=self._default_level,
            handlers=self._handlers,
            enabled=self.is_logging_enabled,
        )

    # Registry

    def get_logger(self, category: str | None = None) -> CategoryLogger:
        return self._registry.get(category or self._default_category)

    def add_logger(self, logger: CategoryLogger) -> None:
        """Register ``logger`` under its name, replacing any existing one."""
        self._registry.add(logger)

    def clear(self) -> None:
        """Forget every registered logger; they are recreated on next use."""
        self._registry.clear()

    def add_handler(self, handler: RecordHandler) -> None:
        """Attach ``handler`` to every current and future category logger."""
        if handler not in self._handlers:
            self._handlers.append(handler)
        for name in self._registry.names():
            self._registry.get(name).add_handler(handler)

    async def aclose(self, timeout: float | None = None) -> bool:
        """Drain the remote dispatcher, if any, and stop its sink."""
        if self.dispatcher is None:
            return True
        return await self.dispatcher.aclose(timeout)

    # Logging calls

    def log(
        self,
        level: Level | int | str,
        message: str,
        *,
        category: str | None = None,
        cause: Cause = None,
    ) -> None:
        self.get_logger(category).log(parse_level(level), message, cause)

    def trace(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.TRACE, message, category=category, cause=cause)

    def debug(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.DEBUG, message, category=category, cause=cause)

    def info(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.INFO, message, category=category, cause=cause)

    def warn(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.WARN, message, category=category, cause=cause)

    def error(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.ERROR, message, category=category, cause=cause)

    def fatal(self, message: str, *, category: str | None = None, cause: Cause = None) -> None:  # fmt: skip
        self.log(Level.FATAL, message, category=category, cause=cause)

    # Guards to skip expensive message construction

    def is_logging_enabled(self) -> bool:
        return self._logging_enabled

    def set_logging_enabled(self, enabled: bool) -> None:
        self._logging_enabled = bool(enabled)

    def is_enabled(self, level: Level, category: str | None = None) -> bool:
        return self.get_logger(category).is_enabled(level)

    def is_trace_enabled(self, category: str | None = None) -> bool:
        return self.is_enabled(Level.TRACE, category)

    def is_debug_enabled(self, category: str | None = None) -> bool:
        return self.is_enabled(Level.DEBUG, category)

    def is_info_enabled(self, category: str | None = None) -> bool:
        return self.is_enabled(Level.INFO, category)

    def is_warn_enabled(self, category: str | None = None) -> bool:
        return self.is_enabled(Level.WARN, category)

    def is_error_enabled(self, category: str | None = None) -> bool:
        return self.is_enabled(Level.ERROR, category)

    def is_fatal_enabled(self, category: str | None = None) -> bool:
        # FATAL shares the ERROR threshold
        return self.is_error_enabled(category)

    def is_record_enabled(self, record: LogRecord) -> bool:
        """Category/enablement check used as a dispatcher's ``enabled_check``.

        Unknown categories are judged against the default level and are not
        registered.
        """
        logger = self._registry.find(record.category)
        if logger is not None:
            return logger.is_enabled(record.level)
        return self._logging_enabled and record.level >= self._default_level
