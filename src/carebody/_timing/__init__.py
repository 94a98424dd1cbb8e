# Area: Timing
"""
Countdown timing for time-bound entities.

This package contains:
- Clock and interval scheduler abstractions (system and simulated)
- The countdown presenter
- A per-entity countdown board
"""

from .clock import (
    Clock,
    SystemClock,
    ManualClock,
    IntervalScheduler,
    ScheduledCall,
    ThreadingScheduler,
    ManualScheduler,
)
from .countdown import Countdown, start_countdown, decompose, format_countdown
from .countdown_board import CountdownBoard

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
    "IntervalScheduler",
    "ScheduledCall",
    "ThreadingScheduler",
    "ManualScheduler",
    "Countdown",
    "start_countdown",
    "decompose",
    "format_countdown",
    "CountdownBoard",
]
