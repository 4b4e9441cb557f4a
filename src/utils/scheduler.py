"""
Frame scheduler - cancellable timers driven by the game loop
"""

import heapq
import itertools
import time
from typing import Callable, Hashable, List, Optional, Tuple


class TimerHandle:
    """Handle for a scheduled callback; cancel() prevents it from firing"""

    def __init__(self, due_ms: float, callback: Callable[[], None], tag: Optional[Hashable]):
        self.due_ms = due_ms
        self.callback = callback
        self.tag = tag
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"TimerHandle(due_ms={self.due_ms:.1f}, tag={self.tag!r}, {state})"


class FrameScheduler:
    """
    Timer queue polled once per frame from the game loop.

    Nothing runs on another thread: callbacks fire inside run_due(), so they
    may touch game state freely. Timers are grouped by tag so every timer of
    a round can be cancelled at once.

    Example:
        scheduler = FrameScheduler()
        scheduler.call_later(500, lambda: board.flash_pad(1, 300), tag=("round", 3))
        ...
        scheduler.cancel_tag(("round", 3))   # round reset, nothing fires

        # In update loop (runs every frame):
        scheduler.run_due()
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            clock: Returns seconds as float (monotonic); injectable for tests
        """
        self._clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def now_ms(self) -> float:
        # Microsecond resolution keeps ms arithmetic exact
        return round(self._clock() * 1000.0, 3)

    def call_later(self, delay_ms: float, callback: Callable[[], None],
                   tag: Optional[Hashable] = None) -> TimerHandle:
        """
        Schedule callback to run delay_ms from now.

        Args:
            delay_ms: Delay in milliseconds (negative values are treated as 0)
            callback: Zero-argument callable
            tag: Optional group key used by cancel_tag()

        Returns:
            TimerHandle for cancellation
        """
        handle = TimerHandle(self.now_ms() + max(0.0, delay_ms), callback, tag)
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))
        return handle

    def cancel_tag(self, tag: Hashable) -> int:
        """Cancel every pending timer with the given tag, returns how many"""
        cancelled = 0
        for _, _, handle in self._queue:
            if handle.tag == tag and handle.pending:
                handle.cancel()
                cancelled += 1
        return cancelled

    def cancel_all(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()

    def run_due(self) -> int:
        """
        Run every callback whose due time has passed, in due order.

        Timers scheduled by a callback with zero delay run in the same pass.

        Returns:
            Number of callbacks executed
        """
        executed = 0
        now = self.now_ms()
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            executed += 1
        return executed

    def pending_count(self, tag: Optional[Hashable] = None) -> int:
        return sum(
            1 for _, _, handle in self._queue
            if handle.pending and (tag is None or handle.tag == tag)
        )
