from __future__ import annotations

import pytest

from relaylog.core.dispatcher import BatchDispatcher
from relaylog.core.levels import Level
from relaylog.core.presets import DISPATCHER_PRESETS, create_dispatcher, get_preset_level
from relaylog.testing import RecordingSink


@pytest.mark.parametrize(
    ("preset", "level"),
    [
        ("all", Level.TRACE),
        ("debug", Level.DEBUG),
        ("info", Level.INFO),
        ("warn", Level.WARN),
        ("error", Level.ERROR),
    ],
)
def test_presets_only_change_threshold(preset: str, level: Level) -> None:
    dispatcher = create_dispatcher(preset, RecordingSink(), coalescing_delay=0.5)

    assert type(dispatcher) is BatchDispatcher
    assert dispatcher.min_level is level
    assert dispatcher.coalescing_delay == 0.5


def test_unknown_preset_lists_valid_names() -> None:
    with pytest.raises(ValueError, match="Valid presets"):
        get_preset_level("verbose")


def test_preset_and_min_level_conflict() -> None:
    with pytest.raises(TypeError):
        create_dispatcher("warn", RecordingSink(), min_level=Level.INFO)


def test_preset_names_are_case_insensitive() -> None:
    assert get_preset_level(" WARN ") is DISPATCHER_PRESETS["warn"]
