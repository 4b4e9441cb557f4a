"""
Service worker - runs service calls off the game loop
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Tuple


class ServiceWorker:
    """
    Runs blocking service calls on a single background thread.

    Results are never delivered from that thread: poll() is called by the
    game loop every frame and invokes each finished call's on_done(future)
    there, so round state is only ever touched on the loop thread.

    Example:
        worker.submit(client.reset_game, on_reset_done)

        # In update loop:
        worker.poll()    # on_reset_done(future) runs here once the call finished
    """

    def __init__(self, logger, executor: Optional[Executor] = None):
        """
        Args:
            logger: ClassLogger instance for logging
            executor: Executor to run calls on, defaults to one worker thread
        """
        self.logger = logger
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="state-service")
        self._pending: List[Tuple[Future, Callable[[Future], None]]] = []

    def submit(self, fn: Callable[..., Any], on_done: Callable[[Future], None], *args) -> Future:
        """
        Start fn(*args) in the background.

        Args:
            fn: Blocking call to run
            on_done: Called with the finished Future from poll()
        """
        future = self._executor.submit(fn, *args)
        self._pending.append((future, on_done))
        self.logger.debug(f"Submitted {getattr(fn, '__name__', fn)} ({len(self._pending)} pending)")
        return future

    def poll(self) -> int:
        """
        Deliver finished calls to their callbacks, in submission order.

        Each call leaves the pending list just before its callback runs. If a
        callback raises, the error propagates and the remaining finished
        calls are delivered by the next poll().

        Returns:
            Number of callbacks invoked
        """
        delivered = 0
        for entry in [entry for entry in self._pending if entry[0].done()]:
            # A callback may have shut the worker down
            if entry not in self._pending:
                continue
            self._pending.remove(entry)
            future, on_done = entry
            if future.cancelled():
                continue
            on_done(future)
            delivered += 1
        return delivered

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def shutdown(self, wait: bool = False) -> None:
        """Cancel queued calls and stop the worker thread"""
        for future, _ in self._pending:
            future.cancel()
        self._pending.clear()
        self._executor.shutdown(wait=wait)
        self.logger.debug("ServiceWorker shut down")
