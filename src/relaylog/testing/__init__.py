"""
Testing utilities for relaylog.

Provides a deterministic scheduler and sink doubles so dispatcher behaviour
can be asserted without sleeping or network access.

Example:
    from relaylog.testing import ManualScheduler, RecordingSink, settle

    async def test_ships_batch():
        sink = RecordingSink()
        scheduler = ManualScheduler()
        dispatcher = BatchDispatcher(sink, scheduler=scheduler)
        dispatcher.publish(record)
        scheduler.advance(0.1)
        await settle()
        assert sink.calls == 1
"""

from .mocks import Outcome, RecordingSink
from .scheduler import ManualScheduler, ManualTimer, settle

__all__ = [
    "ManualScheduler",
    "ManualTimer",
    "Outcome",
    "RecordingSink",
    "settle",
]
