"""
Batching remote log dispatcher.

The dispatcher keeps accepted records in a pending list and ships them to a
remote sink in coalesced batches. While a delivery is scheduled or in flight,
new records keep accumulating and go out with the next batch, so at most one
remote call is outstanding at any time.

Two outcomes are distinguished when a delivery completes:

- the sink answers with an error message: the batch is not re-queued, the
  message is recorded through diagnostics, and delivery carries on;
- the sink call itself fails: the dispatcher is poisoned. Pending records are
  discarded and every later ``publish()`` is a silent no-op. There is no
  retry; a new dispatcher has to be created to resume shipping.

Everything runs on one event loop. The flag guarding the single outstanding
delivery is checked and set in one synchronous step, so no lock is needed.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable, Sequence

from ..metrics.metrics import MetricsCollector
from ..sinks.base import RemoteSink
from . import diagnostics
from .levels import Level, parse_level
from .record import LogRecord
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

DEFAULT_COALESCING_DELAY_SECONDS = 0.1


class DispatcherState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    IN_FLIGHT = "in_flight"
    POISONED = "poisoned"


class BatchDispatcher:
    """Coalesce records into batches and deliver them to a remote sink.

    Args:
        sink: Remote sink receiving each batch.
        min_level: Records below this level are never queued.
        coalescing_delay: Seconds to wait after the first queued record
            before a delivery fires.
        scheduler: Delayed-task scheduler; defaults to the running asyncio loop.
        enabled_check: Extra predicate a record must pass (for example the
            facade's category enablement). Defaults to always true.
        metrics: Optional delivery metrics collector.
        name: Component name used in diagnostics.
    """

    def __init__(
        self,
        sink: RemoteSink,
        *,
        min_level: Level | int | str = Level.TRACE,
        coalescing_delay: float = DEFAULT_COALESCING_DELAY_SECONDS,
        scheduler: Scheduler | None = None,
        enabled_check: Callable[[LogRecord], bool] | None = None,
        metrics: MetricsCollector | None = None,
        name: str = "remote-batch",
    ) -> None:
        if coalescing_delay < 0:
            raise ValueError("coalescing_delay must be >= 0")
        self.name = name
        self._sink = sink
        self._min_level = parse_level(min_level)
        self._delay = float(coalescing_delay)
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._enabled_check = enabled_check
        self._metrics = metrics

        self._pending: list[LogRecord] = []
        self._in_flight_or_scheduled = False
        self._failure: BaseException | None = None
        self._last_error: str | None = None
        self._timer: TimerHandle | None = None
        self._delivery_task: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def min_level(self) -> Level:
        return self._min_level

    @property
    def coalescing_delay(self) -> float:
        return self._delay

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def failure(self) -> BaseException | None:
        """The transport error that poisoned this dispatcher, if any."""
        return self._failure

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def state(self) -> DispatcherState:
        if self._failure is not None:
            return DispatcherState.POISONED
        if not self._in_flight_or_scheduled:
            return DispatcherState.IDLE
        if self._delivery_task is not None:
            return DispatcherState.IN_FLIGHT
        return DispatcherState.SCHEDULED

    def is_loggable(self, record: LogRecord) -> bool:
        """Return True if ``record`` would be queued by ``publish()``."""
        if record.level < self._min_level:
            return False
        if self._enabled_check is None:
            return True
        try:
            return bool(self._enabled_check(record))
        except Exception as exc:
            diagnostics.warn(
                self.name,
                "enabled check failed",
                error=str(exc),
                _rate_limit_key=f"{self.name}:enabled-check",
            )
            return False

    def publish(self, record: LogRecord) -> None:
        if self._failure is not None:
            # remote delivery has been disabled
            if self._metrics is not None and self.is_loggable(record):
                self._metrics.record_records_dropped()
            return
        if self.is_loggable(record):
            self._pending.append(record)
            self._maybe_schedule_flush()

    def _maybe_schedule_flush(self) -> None:
        if self._failure is not None or self._in_flight_or_scheduled:
            return
        if not self._pending:
            return
        # Let a few records accumulate before the remote call fires
        try:
            self._timer = self._scheduler.call_later(self._delay, self._flush)
        except RuntimeError as exc:
            # No running loop yet; records stay queued for the next publish
            diagnostics.warn(
                self.name,
                "cannot schedule delivery",
                error=str(exc),
                pending=len(self._pending),
                _rate_limit_key=f"{self.name}:schedule",
            )
            return
        self._in_flight_or_scheduled = True
        self._idle.clear()

    def _flush(self) -> None:
        self._timer = None
        batch, self._pending = self._pending, []
        if self._metrics is not None:
            self._metrics.record_batch_sent(len(batch))
        loop = asyncio.get_running_loop()
        self._delivery_task = loop.create_task(self._deliver(batch))

    async def _deliver(self, batch: Sequence[LogRecord]) -> None:
        try:
            result = await self._sink.log_on_server(list(batch))
        except asyncio.CancelledError:
            self._on_cancelled(len(batch))
            raise
        except Exception as exc:
            self._on_failure(exc, len(batch))
        else:
            self._on_success(result, len(batch))

    def _on_success(self, result: str | None, size: int) -> None:
        self._delivery_task = None
        if result:
            self._last_error = result
            diagnostics.warn(self.name, "remote logging failed", error=result)
            if self._metrics is not None:
                self._metrics.record_delivery_error()
        else:
            self._last_error = None
            diagnostics.debug(
                self.name, "remote logging batch acknowledged", records=size
            )
            if self._metrics is not None:
                self._metrics.record_batch_acknowledged(size)

        self._in_flight_or_scheduled = False
        self._maybe_schedule_flush()
        if not self._in_flight_or_scheduled:
            self._idle.set()

    def _on_failure(self, exc: BaseException, size: int) -> None:
        self._delivery_task = None
        self._failure = exc
        self._last_error = str(exc)
        dropped = size + len(self._pending)
        self._pending.clear()
        diagnostics.warn(
            self.name,
            "remote logging failed; remote delivery disabled",
            error=str(exc),
            error_type=type(exc).__name__,
            dropped=dropped,
        )
        if self._metrics is not None:
            self._metrics.record_transport_failure()
            self._metrics.record_records_dropped(dropped)
        self._in_flight_or_scheduled = False
        self._idle.set()

    def _on_cancelled(self, size: int) -> None:
        # The batch is lost but the dispatcher stays usable
        self._delivery_task = None
        diagnostics.warn(self.name, "remote logging batch cancelled", dropped=size)
        if self._metrics is not None:
            self._metrics.record_records_dropped(size)
        self._in_flight_or_scheduled = False
        self._idle.set()

    async def drain(self, timeout: float | None = None) -> bool:
        """Wait until no delivery is scheduled or in flight.

        Does not shorten the coalescing delay. Returns False if ``timeout``
        elapsed first.
        """

        async def _wait() -> None:
            while self._in_flight_or_scheduled:
                await self._idle.wait()

        try:
            await asyncio.wait_for(_wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def aclose(self, timeout: float | None = None) -> bool:
        """Drain pending deliveries, then stop the sink if it has ``stop()``.

        The sink is stopped even when the drain times out. Returns the drain
        result.
        """
        drained = await self.drain(timeout)
        stop = getattr(self._sink, "stop", None)
        if stop is not None:
            await stop()
        return drained

    async def health_check(self) -> bool:
        return self._failure is None and self._last_error is None
