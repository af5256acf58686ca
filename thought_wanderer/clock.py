"""
Frame clock - simulated time driven by tick deltas

The core never reads the wall clock. Every timestamp it stores (waypoint
pick time, last frame advance, last accepted thought) comes from a
FrameClock that only moves forward when the scheduler is ticked.

In the running app the delta comes from time.perf_counter(); in tests it
is whatever the test passes, so timing is fully deterministic.
"""


class FrameClock:
    """Monotonic millisecond counter advanced by the tick loop."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        """Current simulated time in milliseconds."""
        return self._now

    def advance(self, dt: float) -> float:
        """
        Move time forward by `dt` milliseconds.

        Negative deltas are ignored (time never runs backwards).
        """
        if dt > 0:
            self._now += dt
        return self._now
