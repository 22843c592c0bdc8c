"""
Public entrypoints for relaylog.

``build_facade()`` returns a ready-to-use logging facade. When remote logging
is enabled in settings (or a sink is passed in), the facade's category loggers
share one ``BatchDispatcher`` that ships qualifying records to the remote sink.
"""

from __future__ import annotations

from ._version import __version__
from .core.dispatcher import BatchDispatcher, DispatcherState
from .core.errors import (
    ConfigurationError,
    PayloadError,
    RelaylogError,
    TransportError,
)
from .core.levels import Level, parse_level
from .core.logger import CategoryLogger
from .core.presets import DISPATCHER_PRESETS, create_dispatcher
from .core.record import ErrorInfo, LogRecord
from .core.scheduler import Scheduler
from .core.settings import Settings
from .facade import LogFacade
from .metrics.metrics import MetricsCollector
from .sinks.base import RemoteSink

__all__ = [
    "BatchDispatcher",
    "CategoryLogger",
    "ConfigurationError",
    "DISPATCHER_PRESETS",
    "DispatcherState",
    "ErrorInfo",
    "Level",
    "LogFacade",
    "LogRecord",
    "MetricsCollector",
    "PayloadError",
    "RelaylogError",
    "RemoteSink",
    "Settings",
    "TransportError",
    "VERSION",
    "__version__",
    "build_facade",
    "create_dispatcher",
    "parse_level",
]


def build_facade(
    settings: Settings | None = None,
    *,
    sink: RemoteSink | None = None,
    scheduler: Scheduler | None = None,
) -> LogFacade:
    """Return a facade wired from ``settings``.

    A dispatcher is attached when ``sink`` is given or ``remote.enabled`` is
    set; in the latter case an ``HttpRemoteSink`` is created for
    ``remote.endpoint``. The dispatcher is reachable as ``facade.dispatcher``.

    Raises:
        ConfigurationError: If remote delivery is enabled without an endpoint.
    """
    cfg = settings or Settings()
    cfg.validate_remote()
    facade = LogFacade(settings=cfg)

    if sink is None and cfg.remote.enabled:
        from .sinks.http import HttpRemoteSink, HttpRemoteSinkConfig

        sink = HttpRemoteSink(
            HttpRemoteSinkConfig(
                endpoint=cfg.remote.endpoint or "",
                headers=cfg.remote.headers,
                timeout_seconds=cfg.remote.timeout_seconds,
            )
        )
    if sink is None:
        return facade

    metrics = MetricsCollector(enabled=True) if cfg.core.enable_metrics else None
    dispatcher = BatchDispatcher(
        sink,
        min_level=cfg.remote.resolved_min_level(),
        coalescing_delay=cfg.remote.coalescing_delay_seconds,
        scheduler=scheduler,
        enabled_check=facade.is_record_enabled,
        metrics=metrics,
    )
    facade.add_handler(dispatcher)
    facade.dispatcher = dispatcher
    return facade


# Version info for compatibility
VERSION = __version__
