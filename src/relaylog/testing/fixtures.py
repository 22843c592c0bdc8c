"""
Pytest fixtures for relaylog tests.

Registered from the root ``conftest.py`` via ``pytest_plugins``.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from ..core import diagnostics
from .mocks import RecordingSink
from .scheduler import ManualScheduler


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def diagnostics_enabled() -> Iterator[None]:
    """Force internal diagnostics on for the duration of a test."""
    diagnostics.set_enabled(True)
    yield
    diagnostics._reset()
