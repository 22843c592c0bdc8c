"""
Internal diagnostics for non-fatal library errors.

Diagnostics are one JSON line per event, written through the stdlib logger
``relaylog.diagnostics`` so applications decide where they end up. They are
never routed back into a remote dispatcher (the stdlib bridge skips
``relaylog.*`` loggers) and they never raise.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import orjson

_logger = logging.getLogger("relaylog.diagnostics")

# Cached on first use; tests reset it to None
_internal_logging_enabled: bool | None = None

_RATE_LIMIT_WINDOW_SECONDS = 5.0
_last_emitted: dict[str, float] = {}


def _enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(
                Settings().core.internal_logging_enabled
            )
        except Exception:
            _internal_logging_enabled = True
    return _internal_logging_enabled


def set_enabled(enabled: bool) -> None:
    """Override the cached ``internal_logging_enabled`` setting."""
    global _internal_logging_enabled
    _internal_logging_enabled = bool(enabled)


def _rate_limited(key: str | None) -> bool:
    if key is None:
        return False
    now = time.monotonic()
    last = _last_emitted.get(key)
    if last is not None and now - last < _RATE_LIMIT_WINDOW_SECONDS:
        return True
    _last_emitted[key] = now
    return False


def _emit(levelno: int, component: str, message: str, fields: dict[str, Any]) -> None:
    if not _enabled():
        return
    if _rate_limited(fields.pop("_rate_limit_key", None)):
        return
    payload = {"component": component, "message": message, **fields}
    try:
        line = orjson.dumps(payload, default=str).decode("utf-8")
        _logger.log(levelno, line)
    except Exception:
        # Diagnostics must never break the caller
        return


def warn(component: str, message: str, **fields: Any) -> None:
    """Record a warning-level diagnostic for ``component``."""
    _emit(logging.WARNING, component, message, fields)


def debug(component: str, message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, component, message, fields)


def _reset() -> None:
    """Clear cached state (for testing only)."""
    global _internal_logging_enabled
    _internal_logging_enabled = None
    _last_emitted.clear()
