"""Stopwatch for measuring elapsed time against a monotonic clock."""

import logging
from typing import Optional

from .clock import SYSTEM_CLOCK, TICKS_PER_SECOND, MonotonicClock

TICKS_PER_MILLISECOND = 10_000

logger = logging.getLogger(__name__)


def _scale_ticks(raw_ticks: int, tick_scale: float) -> int:
    # Float multiply then truncate toward zero
    return int(float(raw_ticks) * tick_scale)


class Stopwatch:
    """Accumulates elapsed time over one or more start/stop intervals.

    Not thread-safe: callers sharing an instance must serialize start, stop,
    reset and restart themselves.
    """

    def __init__(self, clock: Optional[MonotonicClock] = None):
        """
        Create a stopped stopwatch with no elapsed time.

        Args:
            clock: Clock source to read ticks from (defaults to the system clock)
        """
        self._clock = clock or SYSTEM_CLOCK
        self.reset()

    @classmethod
    def start_new(cls, clock: Optional[MonotonicClock] = None) -> 'Stopwatch':
        """Create a stopwatch and start it immediately."""
        watch = cls(clock)
        watch.start()
        return watch

    def start(self) -> None:
        """Start measuring; does nothing if already running."""
        if not self._is_running:
            self._start_timestamp = self._clock.now()
            self._is_running = True

    def stop(self) -> None:
        """Stop measuring and fold the current interval into the total."""
        if self._is_running:
            end_timestamp = self._clock.now()
            self._elapsed += end_timestamp - self._start_timestamp
            self._is_running = False

            if self._elapsed < 0:
                logger.warning(
                    f"Clock went backwards (start={self._start_timestamp}, end={end_timestamp}); "
                    f"clamping elapsed ticks {self._elapsed} to 0"
                )
                self._elapsed = 0

    def reset(self) -> None:
        """Stop measuring and clear the elapsed time."""
        self._elapsed = 0
        self._is_running = False
        self._start_timestamp = 0

    def restart(self) -> None:
        """Clear the elapsed time and start measuring from now."""
        self._elapsed = 0
        self._start_timestamp = self._clock.now()
        self._is_running = True

    @property
    def clock(self) -> MonotonicClock:
        return self._clock

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def raw_elapsed_ticks(self) -> int:
        """Elapsed time in native clock ticks, including the running interval."""
        time_elapsed = self._elapsed
        if self._is_running:
            time_elapsed += self._clock.now() - self._start_timestamp
        return time_elapsed

    @property
    def elapsed_ticks(self) -> int:
        """Elapsed time in 100-nanosecond ticks."""
        return _scale_ticks(self.raw_elapsed_ticks, self._clock.tick_scale)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ticks / TICKS_PER_SECOND

    @property
    def elapsed_milliseconds(self) -> int:
        """Elapsed time in whole milliseconds, truncated toward zero."""
        ticks = self.elapsed_ticks
        millis = abs(ticks) // TICKS_PER_MILLISECOND
        # A clock stepping back mid-interval can make a running total negative
        return millis if ticks >= 0 else -millis

    def __enter__(self) -> 'Stopwatch':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def __str__(self) -> str:
        return f"{self.elapsed_seconds} sec"

    def __repr__(self) -> str:
        return f"Stopwatch(elapsed={self.elapsed_seconds}s, is_running={self._is_running})"


def get_timestamp(clock: Optional[MonotonicClock] = None) -> int:
    """Read the current raw tick value from the clock."""
    return (clock or SYSTEM_CLOCK).now()


def get_elapsed_seconds(
    start_timestamp: int,
    end_timestamp: Optional[int] = None,
    clock: Optional[MonotonicClock] = None,
) -> float:
    """
    Seconds between two raw timestamps, without a Stopwatch instance.

    Args:
        start_timestamp: Raw reading from get_timestamp()
        end_timestamp: Raw reading to measure up to (defaults to now)
        clock: Clock the timestamps were read from (defaults to the system clock)

    Returns:
        Elapsed seconds, converted through the same 100 ns tick pipeline as Stopwatch
    """
    clock = clock or SYSTEM_CLOCK
    if end_timestamp is None:
        end_timestamp = clock.now()

    ticks = _scale_ticks(end_timestamp - start_timestamp, clock.tick_scale)
    return ticks / TICKS_PER_SECOND
