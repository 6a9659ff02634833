"""Monotonic stopwatch: elapsed-time measurement with sub-millisecond precision."""

from .clock import (
    FREQUENCY,
    IS_HIGH_RESOLUTION,
    SYSTEM_CLOCK,
    TICKS_PER_SECOND,
    ClockError,
    MonotonicClock,
)
from .core import (
    TICKS_PER_MILLISECOND,
    Stopwatch,
    get_elapsed_seconds,
    get_timestamp,
)

__all__ = [
    "FREQUENCY",
    "IS_HIGH_RESOLUTION",
    "SYSTEM_CLOCK",
    "TICKS_PER_SECOND",
    "TICKS_PER_MILLISECOND",
    "ClockError",
    "MonotonicClock",
    "Stopwatch",
    "get_elapsed_seconds",
    "get_timestamp",
]
