"""
Simulation clock.

One Clock is shared by every component of a simulation run; all of them
read the same tick counter, which only the driver advances.
"""

from __future__ import annotations


class Clock:
    """Monotonically increasing tick counter."""

    # Last tick at which new mail may arrive
    LAST_DELIVERY_TIME = 100

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("Clock cannot start before tick 0")
        self._time = start

    @property
    def time(self) -> int:
        """Current tick."""
        return self._time

    def tick(self) -> int:
        """Advance one tick and return the new time."""
        self._time += 1
        return self._time

    def __repr__(self) -> str:
        return f"Clock(time={self._time})"
