"""
Rolling window call tracker for the SCB API rate limit.

The API permits at most 10 calls per rolling 10 seconds and answers 429
beyond that. After a 429 the caller waits until the oldest call in the
window has aged out; RateTracker computes that wait.

The tracker does not forbid calls itself; the API enforces the limit.
"""

from collections import deque
from typing import Callable, Deque, List, Optional
import threading
import time


class RateTracker:
    """
    Timestamps of the calls made within the trailing window.

    One instance is shared by every call of a crawl (or query session) so
    the budget is respected globally, not per branch.

    Usage:
        tracker = RateTracker()
        tracker.record()
        wait = tracker.time_until_slot_free()

    Attributes:
        window_seconds: Length of the rolling window
        max_calls: Calls the API permits within one window
    """

    def __init__(
        self,
        window_seconds: float = 10.0,
        max_calls: int = 10,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Args:
            window_seconds: Length of the rolling window in seconds
            max_calls: Calls permitted within one window
            clock: Monotonic time source (defaults to time.monotonic)
        """
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got: {window_seconds}")
        if max_calls <= 0:
            raise ValueError(f"max_calls must be positive, got: {max_calls}")

        self.window_seconds = window_seconds
        self.max_calls = max_calls
        self._clock = clock or time.monotonic
        self._calls: Deque[float] = deque()
        self._lock = threading.Lock()

    def _purge(self, now: float) -> None:
        while self._calls and now - self._calls[0] >= self.window_seconds:
            self._calls.popleft()

    def record(self, now: Optional[float] = None) -> List[float]:
        """
        Register one call and drop every call older than the window.

        Args:
            now: Timestamp of the call (defaults to the clock)

        Returns:
            Timestamps still within the window, oldest first
        """
        with self._lock:
            now = self._clock() if now is None else now
            self._calls.append(now)
            self._purge(now)
            return list(self._calls)

    def time_until_slot_free(self, now: Optional[float] = None) -> float:
        """
        Seconds until the oldest tracked call leaves the window.

        Args:
            now: Current timestamp (defaults to the clock)

        Returns:
            0.0 if fewer than max_calls calls are within the window,
            otherwise the non-negative time until the oldest one expires
        """
        with self._lock:
            now = self._clock() if now is None else now
            self._purge(now)
            if len(self._calls) < self.max_calls:
                return 0.0
            return max(0.0, self._calls[0] + self.window_seconds - now)

    def __len__(self) -> int:
        with self._lock:
            self._purge(self._clock())
            return len(self._calls)

    def __repr__(self) -> str:
        return (
            f"RateTracker(window_seconds={self.window_seconds}, "
            f"max_calls={self.max_calls}, tracked={len(self._calls)})"
        )
