# Area: Timing
"""
carebody._timing.countdown — Countdown presenter
================================================

Turns a target timestamp into a stream of remaining-time payloads and a
single expiry notification.

Every tick recomputes ``target - clock.now()`` instead of decrementing a
counter, so a stalled host catches up on its next tick. The first tick
runs synchronously in ``start()``.

Guarantees:
- ``on_expired`` fires at most once, and the timer stops after it.
- After ``cancel()`` returns, no callback fires.
- A missing target produces an inert countdown: no ticks, no expiry.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .._config import TICK_INTERVAL_SECONDS
from .._shared.timestamps import parse_timestamp
from ..types import CountdownTick
from .clock import Clock, IntervalScheduler, ScheduledCall, SystemClock, ThreadingScheduler

logger = logging.getLogger("carebody.countdown")

TickCallback = Callable[[CountdownTick], None]
ExpiredCallback = Callable[[], None]


def decompose(remaining: timedelta) -> CountdownTick:
    """
    Split a remaining duration into floored days/hours/minutes/seconds.

    Negative durations are clamped to zero.
    """
    total = max(0, int(remaining.total_seconds() // 1))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return CountdownTick(days=days, hours=hours, minutes=minutes, seconds=seconds)


def format_countdown(tick: CountdownTick) -> str:
    """Render a tick as ``"{d}d {hh}h:{mm}m:{ss}s"``."""
    return (
        f"{tick['days']}d {tick['hours']:02d}h:"
        f"{tick['minutes']:02d}m:{tick['seconds']:02d}s"
    )


class Countdown:
    """
    One countdown instance with its own timer.

    Usage:
        countdown = Countdown(deadline, on_tick=render, on_expired=refresh)
        countdown.start()
        ...
        countdown.cancel()   # on teardown
    """

    def __init__(
        self,
        target: Optional[datetime | str],
        on_tick: TickCallback,
        on_expired: Optional[ExpiredCallback] = None,
        *,
        clock: Optional[Clock] = None,
        scheduler: Optional[IntervalScheduler] = None,
        interval: float = TICK_INTERVAL_SECONDS,
    ) -> None:
        self.target = parse_timestamp(target)
        self.on_tick = on_tick
        self.on_expired = on_expired
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or ThreadingScheduler()
        self.interval = interval
        self._lock = threading.RLock()
        self._call: Optional[ScheduledCall] = None
        self._started = False
        self._expired = False
        self._cancelled = False
        self.last_tick: Optional[CountdownTick] = None

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._call is not None and not self._call.cancelled

    def start(self) -> "Countdown":
        """Tick once immediately, then every `interval` seconds."""
        with self._lock:
            if self._started or self._cancelled:
                return self
            self._started = True
            if self.target is None:
                logger.debug("No target time; countdown not started")
                return self
            self._tick()
            if not self._expired and not self._cancelled:
                self._call = self.scheduler.call_every(self.interval, self._tick)
        return self

    def cancel(self) -> None:
        """Stop the timer. No callback fires after this returns."""
        with self._lock:
            self._cancelled = True
            self._stop_timer()

    def remaining(self) -> Optional[timedelta]:
        if self.target is None:
            return None
        return self.target - self.clock.now()

    def _stop_timer(self) -> None:
        if self._call is not None:
            self._call.cancel()
            self._call = None

    def _tick(self) -> None:
        with self._lock:
            if self._cancelled or self._expired:
                return
            remaining = self.remaining()
            if remaining is None:
                return
            if remaining <= timedelta(0):
                self._expired = True
                self._stop_timer()
                self.last_tick = decompose(timedelta(0))
                logger.info("Countdown to %s expired", self.target.isoformat())
                if self.on_expired is not None:
                    try:
                        self.on_expired()
                    except Exception:
                        logger.exception("on_expired callback failed")
                return
            tick = decompose(remaining)
            self.last_tick = tick
            try:
                self.on_tick(tick)
            except Exception:
                logger.exception("on_tick callback failed")


def start_countdown(
    target: Optional[datetime | str],
    on_tick: TickCallback,
    on_expired: Optional[ExpiredCallback] = None,
    *,
    clock: Optional[Clock] = None,
    scheduler: Optional[IntervalScheduler] = None,
    interval: float = TICK_INTERVAL_SECONDS,
) -> Countdown:
    """Create and start a countdown; the returned handle has ``cancel()``."""
    countdown = Countdown(
        target,
        on_tick,
        on_expired,
        clock=clock,
        scheduler=scheduler,
        interval=interval,
    )
    return countdown.start()
