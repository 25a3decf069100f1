"""Monotonic time source and a simple start/stop clock."""

from __future__ import annotations

import time
from typing import Callable


def absolute_time() -> float:
    """Return seconds from the platform's high-resolution monotonic clock."""
    return time.perf_counter()


class Clock:
    """Measures time since :meth:`start`, refreshed on each :meth:`update`."""

    def __init__(self, time_source: Callable[[], float] | None = None) -> None:
        self._now = time_source if time_source is not None else absolute_time
        self._start_time = 0.0
        self._elapsed = 0.0

    def start(self) -> None:
        """Start (or restart) the clock and reset the elapsed time."""
        self._start_time = self._now()
        self._elapsed = 0.0

    def stop(self) -> None:
        """Stop the clock; the last elapsed value is kept."""
        self._start_time = 0.0

    def update(self) -> None:
        """Recompute the elapsed time if the clock is running."""
        if self._start_time:
            self._elapsed = self._now() - self._start_time

    @property
    def elapsed(self) -> float:
        """Seconds between the start and the last update."""
        return self._elapsed

    @property
    def start_time(self) -> float:
        """Time the clock was started at, or 0 when stopped."""
        return self._start_time