"""Shared fixtures for stopwatch tests."""

import pytest

from stopwatch.clock import MonotonicClock


class FakeClock(MonotonicClock):
    """Clock whose tick reading only moves when a test advances it."""

    def __init__(self, frequency: int = 1_000_000_000, start: int = 0):
        self.ticks = start
        super().__init__(read_ticks=lambda: self.ticks, frequency=frequency, name="fake")

    def advance(self, ticks: int) -> None:
        self.ticks += ticks


@pytest.fixture
def clock():
    """Fake nanosecond clock starting at tick 0."""
    return FakeClock()


@pytest.fixture
def make_clock():
    """Factory for fake clocks with a chosen frequency and starting tick."""
    return FakeClock
