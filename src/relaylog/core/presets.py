"""Built-in level thresholds for remote batch delivery.

Send everything, or only DEBUG/INFO/WARN/ERROR and above. A preset only picks
``min_level``; every dispatcher is the same ``BatchDispatcher`` type.
"""

from __future__ import annotations

from typing import Any, Literal

from ..sinks.base import RemoteSink
from .dispatcher import BatchDispatcher
from .levels import Level

PresetName = Literal["all", "debug", "info", "warn", "error"]

DISPATCHER_PRESETS: dict[str, Level] = {
    "all": Level.TRACE,
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "error": Level.ERROR,
}


def get_preset_level(name: str) -> Level:
    """Return the threshold for preset ``name``.

    Raises:
        ValueError: If the preset is unknown.
    """
    key = name.strip().lower()
    if key not in DISPATCHER_PRESETS:
        valid = ", ".join(sorted(DISPATCHER_PRESETS))
        raise ValueError(f"Unknown preset '{name}'. Valid presets: {valid}")
    return DISPATCHER_PRESETS[key]


def create_dispatcher(
    preset: PresetName | str,
    sink: RemoteSink,
    **kwargs: Any,
) -> BatchDispatcher:
    """Build a ``BatchDispatcher`` whose threshold comes from ``preset``."""
    if "min_level" in kwargs:
        raise TypeError("min_level is set by the preset")
    return BatchDispatcher(sink, min_level=get_preset_level(preset), **kwargs)
