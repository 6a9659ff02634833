"""Monotonic clock source used by the stopwatch."""

import time
from typing import Any, Callable, Dict

# 100 ns conversion units, the same unit the stopwatch reports elapsed ticks in
TICKS_PER_SECOND = 10_000_000


class ClockError(RuntimeError):
    """Raised when a clock source cannot be set up."""


class MonotonicClock:
    """A monotonically non-decreasing integer tick counter with a fixed frequency.

    The tick scale (conversion units per native tick) is computed once here so
    every stopwatch sharing the clock uses the same factor.
    """

    def __init__(
        self,
        read_ticks: Callable[[], int] = time.perf_counter_ns,
        frequency: int = 1_000_000_000,
        is_high_resolution: bool = True,
        name: str = "perf_counter",
    ):
        """
        Create a clock source.

        Args:
            read_ticks: Callable returning the current raw tick reading
            frequency: Native ticks per second
            is_high_resolution: Whether the clock is fit for sub-millisecond timing
            name: Name of the underlying clock, as known to time.get_clock_info()

        Raises:
            ClockError: If the frequency is not a positive integer
        """
        if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency <= 0:
            raise ClockError(f"Clock frequency must be a positive integer, got {frequency!r}")

        self._read_ticks = read_ticks
        self.frequency = frequency
        self.is_high_resolution = is_high_resolution
        self.name = name
        self.tick_scale = TICKS_PER_SECOND / frequency

    def now(self) -> int:
        """Current raw tick reading."""
        return int(self._read_ticks())

    def describe(self) -> Dict[str, Any]:
        """Summarize the clock's properties."""
        info: Dict[str, Any] = {
            "name": self.name,
            "frequency": self.frequency,
            "tick_scale": self.tick_scale,
            "is_high_resolution": self.is_high_resolution,
            "resolution_sec": 1 / self.frequency,
            "monotonic": True,
            "implementation": None,
        }
        try:
            clock_info = time.get_clock_info(self.name)
        except ValueError:
            # Not a clock the interpreter knows about (e.g. a test clock)
            return info

        info["resolution_sec"] = clock_info.resolution
        info["monotonic"] = clock_info.monotonic
        info["implementation"] = clock_info.implementation
        return info

    def __repr__(self) -> str:
        return f"MonotonicClock(name={self.name!r}, frequency={self.frequency})"


def _build_system_clock() -> MonotonicClock:
    try:
        clock = MonotonicClock()
        clock.now()
    except Exception as e:
        raise ClockError(f"System monotonic clock is unavailable: {e}") from e

    if not time.get_clock_info(clock.name).monotonic:
        raise ClockError(f"Clock '{clock.name}' is not monotonic on this platform")
    return clock


SYSTEM_CLOCK = _build_system_clock()

FREQUENCY = SYSTEM_CLOCK.frequency

IS_HIGH_RESOLUTION = True
