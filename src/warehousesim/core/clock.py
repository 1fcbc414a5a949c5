import threading
import time


class SystemClock:
    """Wall-clock pacing. Waits are interruptible through the cancel event."""

    def now(self) -> float:
        return time.monotonic()

    def wait(self, cancel: threading.Event, seconds: float) -> bool:
        """
        Suspends for up to `seconds`, returning early when `cancel` is set.
        Returns True if cancellation was requested.
        """
        if seconds <= 0:
            return cancel.is_set()
        return cancel.wait(seconds)


class ScaledClock(SystemClock):
    """
    Multiplies every delay by `scale`. A scale of 0 turns pacing into a bare
    thread yield, which lets tests run a whole simulation almost instantly.
    """

    def __init__(self, scale: float = 0.0):
        if scale < 0:
            raise ValueError("Clock scale must be non-negative.")
        self.scale = scale
        self._elapsed = 0.0
        self._lock = threading.Lock()

    def now(self) -> float:
        # Logical time: sum of all requested delays, unscaled.
        with self._lock:
            return self._elapsed

    def wait(self, cancel: threading.Event, seconds: float) -> bool:
        with self._lock:
            self._elapsed += max(seconds, 0.0)
        scaled = seconds * self.scale
        if scaled <= 0:
            time.sleep(0)  # yield to other threads
            return cancel.is_set()
        return cancel.wait(scaled)
