"""Minimum-interval throttle between downloads."""
import time


class RateLimiter:
    """Enforces min_interval seconds between a completed download and the next step.

    clock and sleep are injectable so tests can drive time by hand.
    """
    
    def __init__(self, min_interval, clock=time.monotonic, sleep=time.sleep):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_mark = None
    
    def mark(self):
        """Record that a download just completed."""
        self._last_mark = self._clock()
    
    def remaining(self) -> float:
        if self._last_mark is None:
            return 0.0
        elapsed = self._clock() - self._last_mark
        return max(0.0, self.min_interval - elapsed)
    
    def wait(self):
        """Block until min_interval has passed since the last mark."""
        delay = self.remaining()
        if delay > 0:
            self._sleep(delay)
        return delay
