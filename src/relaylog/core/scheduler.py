"""
Delayed-task scheduling seam used by the batch dispatcher.

Production code schedules on the running asyncio loop. Tests substitute
``relaylog.testing.ManualScheduler`` to fire timers deterministically.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - structural protocol
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs ``callback`` once after ``delay`` seconds."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> TimerHandle:  # pragma: no cover - structural protocol
        ...


class AsyncioScheduler:
    """Schedule on the event loop that is running when ``call_later`` is called."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)
