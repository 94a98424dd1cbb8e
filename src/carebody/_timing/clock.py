# Area: Timing
"""
carebody._timing.clock — Clock and interval scheduler abstractions
==================================================================

Countdowns never read the wall clock or start timers on their own: they
are handed a ``Clock`` (what time is it) and an ``IntervalScheduler``
(call me every N seconds). Two pairs are provided:

- ``SystemClock`` + ``ThreadingScheduler`` for real hosts without an
  event loop of their own.
- ``ManualClock`` + ``ManualScheduler`` for simulated time. Advancing the
  manual scheduler moves the clock forward and fires due callbacks in
  order, so tests run without real delays.

Hosts that own an event loop (a UI toolkit, asyncio) implement
``IntervalScheduler`` on top of their periodic-callback primitive.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from .._shared.timestamps import parse_timestamp, utc_now

logger = logging.getLogger("carebody.clock")


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return utc_now()


class ManualClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, start: datetime | str) -> None:
        parsed = parse_timestamp(start)
        if parsed is None:
            raise ValueError(f"ManualClock needs a valid start time, got {start!r}")
        self._now = parsed

    def now(self) -> datetime:
        return self._now

    def set(self, when: datetime | str) -> None:
        parsed = parse_timestamp(when)
        if parsed is None:
            raise ValueError(f"Invalid time: {when!r}")
        self._now = parsed

    def advance(self, seconds: float) -> datetime:
        self._now = self._now + timedelta(seconds=seconds)
        return self._now


class ScheduledCall(ABC):
    """Handle to a repeating callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the callback. No-op if already cancelled."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """True once cancel() has been called."""


class IntervalScheduler(ABC):
    """Host periodic-callback primitive."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledCall:
        """Invoke callback every `interval` seconds until cancelled."""


# ── Threading implementation ─────────────────────────────────


class _ThreadedCall(ScheduledCall):
    """
    Repeating call on a daemon thread.

    cancel() only sets the stop flag; the thread is never joined. It exits
    as soon as the wait wakes, or after the callback in flight returns.
    Being a daemon it never blocks interpreter exit, so a callback may be
    cut short at shutdown.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self._interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        # Event.wait returns True as soon as cancel() sets the flag
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Scheduled callback failed")

    def cancel(self) -> None:
        self._stop.set()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()


class ThreadingScheduler(IntervalScheduler):
    """Runs each repeating callback on its own daemon thread."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledCall:
        if interval <= 0:
            raise ValueError("interval must be positive")
        call = _ThreadedCall(interval, callback)
        call.start()
        return call


# ── Simulated implementation ─────────────────────────────────


class _ManualCall(ScheduledCall):
    def __init__(self, interval: float, callback: Callable[[], None], due: datetime) -> None:
        self.interval = interval
        self.callback = callback
        self.due = due
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(IntervalScheduler):
    """
    Interval scheduler driven by a ManualClock.

    ``advance(seconds)`` walks the clock forward, stopping at every due
    callback so each one observes the time it was scheduled for.
    """

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self._calls: List[_ManualCall] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledCall:
        if interval <= 0:
            raise ValueError("interval must be positive")
        call = _ManualCall(
            interval, callback, self.clock.now() + timedelta(seconds=interval)
        )
        self._calls.append(call)
        return call

    @property
    def active_calls(self) -> int:
        return sum(1 for c in self._calls if not c.cancelled)

    def _next_due(self, until: datetime) -> Optional[_ManualCall]:
        pending = [c for c in self._calls if not c.cancelled and c.due <= until]
        if not pending:
            return None
        return min(pending, key=lambda c: c.due)

    def advance(self, seconds: float) -> None:
        """Move time forward by `seconds`, firing due callbacks in order."""
        until = self.clock.now() + timedelta(seconds=seconds)
        while True:
            call = self._next_due(until)
            if call is None:
                break
            if call.due > self.clock.now():
                self.clock.set(call.due)
            call.due = call.due + timedelta(seconds=call.interval)
            call.callback()
        self.clock.set(until)
        self._calls = [c for c in self._calls if not c.cancelled]

    def skip(self, seconds: float) -> None:
        """Move time forward without firing anything (a stalled host)."""
        self.clock.advance(seconds)
