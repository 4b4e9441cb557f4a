"""
Timing utility for throttling execution in game loops
"""

import time
from typing import Callable


class OnceInMs:
    """
    Timer for throttling code execution to at most once per interval.

    Use this to limit how often expensive operations run in the game loop,
    even though the loop itself runs every frame.

    Example:
        self._memory_monitor = OnceInMs(60000)  # Once per minute

        # In update loop:
        if self._memory_monitor.should_execute():
            self._log_memory_usage()
    """

    def __init__(self, interval_ms: int, clock: Callable[[], float] = time.monotonic):
        self.interval_ms = interval_ms
        self._clock = clock
        self.last_execution = None

    def should_execute(self) -> bool:
        """True if the interval has passed since the last True (always True the first time)"""
        current = self._clock()
        if self.last_execution is None or round((current - self.last_execution) * 1000, 3) >= self.interval_ms:
            self.last_execution = current
            return True
        return False

    def reset(self) -> None:
        """Force next should_execute() call to return True"""
        self.last_execution = None

    def remaining_ms(self) -> float:
        """Milliseconds until next execution (negative if overdue)"""
        if self.last_execution is None:
            return 0.0
        return self.interval_ms - (self._clock() - self.last_execution) * 1000
