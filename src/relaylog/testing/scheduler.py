"""
Deterministic scheduler for tests.

Timers never fire on their own; tests move the clock with ``advance()`` or
fire everything with ``run_all()``. Call these from inside a running event
loop when the scheduled callbacks create tasks (the dispatcher's flush does).
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass(order=True)
class ManualTimer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """``Scheduler`` whose clock only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[ManualTimer] = []
        self._seq = itertools.count()
        self.scheduled_delays: list[float] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, next(self._seq), callback)
        self._timers.append(timer)
        self.scheduled_delays.append(delay)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def _pop_due(self, until: float) -> ManualTimer | None:
        due = sorted(t for t in self._timers if not t.cancelled and t.due <= until)
        if not due:
            return None
        timer = due[0]
        self._timers.remove(timer)
        return timer

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing timers that come due; return count."""
        return self._run_until(self.now + seconds)

    def _run_until(self, target: float) -> int:
        fired = 0
        while (timer := self._pop_due(target)) is not None:
            self.now = max(self.now, timer.due)
            timer.callback()
            fired += 1
        self.now = max(self.now, target)
        return fired

    def run_all(self) -> int:
        """Fire every pending timer, including ones scheduled while firing."""
        fired = 0
        while self.pending:
            fired += self._run_until(
                max(t.due for t in self._timers if not t.cancelled)
            )
        return fired


async def settle(ticks: int = 10) -> None:
    """Yield to the loop a few times so spawned delivery tasks can finish."""
    for _ in range(ticks):
        await asyncio.sleep(0)
