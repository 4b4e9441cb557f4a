"""
Shared fixtures: a manual clock, executors that run service calls on demand,
a scripted game-state client and the headless board/tone controller.
"""

import logging
from collections import deque
from concurrent.futures import Executor, Future

import pytest

from audio_system import MockToneController
from display_system import ConsoleBoard
from game_system import GameRoundController
from pad_system import PAD_BINDINGS, PadColor
from service_client import GameStateSnapshot, ServiceWorker
from utils import ClassLogger, FrameScheduler


class FakeClock:
    """Seconds clock advanced by hand in whole milliseconds"""

    def __init__(self, start_ms: int = 100000):
        self.ms = start_ms

    def __call__(self) -> float:
        return self.ms / 1000.0

    def advance_ms(self, ms: int) -> None:
        self.ms += ms


class ManualExecutor(Executor):
    """Queues submitted calls until run_next()/run_all() executes them"""

    def __init__(self):
        self.queued = deque()

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.queued.append((future, fn, args, kwargs))
        return future

    def run_next(self) -> Future:
        future, fn, args, kwargs = self.queued.popleft()
        if future.set_running_or_notify_cancel():
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as e:
                future.set_exception(e)
        return future

    def run_all(self) -> None:
        while self.queued:
            self.run_next()

    def shutdown(self, wait=True, **kwargs):
        self.queued.clear()


class ScriptedClient:
    """
    Stand-in for GameStateClient.

    Each call pops the next scripted outcome for that endpoint: a snapshot is
    returned, an exception instance is raised.
    """

    def __init__(self):
        self.reset_results = deque()
        self.submit_results = deque()
        self.submitted = []
        self.reset_calls = 0
        self.closed = False

    def reset_game(self):
        self.reset_calls += 1
        return self._next(self.reset_results)

    def submit_sequence(self, colors):
        self.submitted.append(list(colors))
        return self._next(self.submit_results)

    def close(self):
        self.closed = True

    @staticmethod
    def _next(results):
        result = results.popleft()
        if isinstance(result, Exception):
            raise result
        return result


def snapshot(*colors, level=None, high_score=0):
    """Snapshot for the given colors; level defaults to the sequence length"""
    return GameStateSnapshot(
        sequence=tuple(colors),
        level=level if level is not None else max(1, len(colors)),
        high_score=high_score,
    )


@pytest.fixture
def logger():
    return ClassLogger(logging.getLogger("simon-test"), "Test", logging.DEBUG)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return FrameScheduler(clock=clock)


@pytest.fixture
def executor():
    return ManualExecutor()


@pytest.fixture
def worker(logger, executor):
    return ServiceWorker(logger, executor=executor)


@pytest.fixture
def client():
    return ScriptedClient()


@pytest.fixture
def board(logger):
    return ConsoleBoard(logger)


@pytest.fixture
def sound(logger):
    return MockToneController([b.frequency_hz for b in PAD_BINDINGS], logger)


@pytest.fixture
def controller(client, worker, scheduler, board, sound, logger):
    return GameRoundController(
        client=client,
        worker=worker,
        scheduler=scheduler,
        board=board,
        sound_controller=sound,
        logger=logger,
    )


@pytest.fixture
def settle(executor, worker):
    """Run every queued service call and deliver the results"""
    def _settle():
        executor.run_all()
        return worker.poll()
    return _settle


@pytest.fixture
def ready_controller(controller, client, settle):
    """Controller with a loaded one-pad game (red), still IDLE"""
    client.reset_results.append(snapshot(PadColor.RED))
    controller.initialize()
    settle()
    return controller
