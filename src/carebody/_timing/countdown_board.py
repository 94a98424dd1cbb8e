# Area: Timing
"""
carebody._timing.countdown_board — One live countdown per entity
================================================================

Tracks the countdowns currently rendered, keyed by entity id. Showing a
countdown for an entity that already has one replaces (and cancels) the
old timer, so a re-render never leaves two timers racing for the same
card. Tearing down a view cancels one or all of them.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from .._config import TICK_INTERVAL_SECONDS
from .clock import Clock, IntervalScheduler, SystemClock, ThreadingScheduler
from .countdown import Countdown, ExpiredCallback, TickCallback

logger = logging.getLogger("carebody.countdown_board")


class CountdownBoard:
    """
    Registry of live countdowns keyed by entity id.

    All countdowns share the board's clock and scheduler.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        scheduler: Optional[IntervalScheduler] = None,
        interval: float = TICK_INTERVAL_SECONDS,
    ) -> None:
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or ThreadingScheduler()
        self.interval = interval
        self._countdowns: Dict[str, Countdown] = {}

    def show(
        self,
        entity_id: str,
        target: Optional[datetime | str],
        on_tick: TickCallback,
        on_expired: Optional[ExpiredCallback] = None,
    ) -> Countdown:
        """Start (or replace) the countdown for an entity."""
        self.cancel(entity_id)

        def _expired() -> None:
            self._countdowns.pop(entity_id, None)
            if on_expired is not None:
                on_expired()

        countdown = Countdown(
            target,
            on_tick,
            _expired,
            clock=self.clock,
            scheduler=self.scheduler,
            interval=self.interval,
        )
        self._countdowns[entity_id] = countdown
        countdown.start()
        if countdown.expired or countdown.target is None:
            self._countdowns.pop(entity_id, None)
        logger.debug("Countdown shown for %s until %s", entity_id, target)
        return countdown

    def get(self, entity_id: str) -> Optional[Countdown]:
        return self._countdowns.get(entity_id)

    def active_ids(self) -> List[str]:
        """Entity ids with a running countdown."""
        return [k for k, c in self._countdowns.items() if c.running]

    def cancel(self, entity_id: str) -> None:
        """Cancel an entity's countdown. No-op if not found."""
        countdown = self._countdowns.pop(entity_id, None)
        if countdown is not None:
            countdown.cancel()
            logger.debug("Countdown cancelled for %s", entity_id)

    def clear(self) -> None:
        """Cancel every tracked countdown."""
        for countdown in self._countdowns.values():
            countdown.cancel()
        self._countdowns.clear()
        logger.debug("All countdowns cleared")
