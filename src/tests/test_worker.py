from concurrent.futures import ThreadPoolExecutor

import pytest

from service_client import ServiceWorker


def test_results_delivered_only_on_poll(worker, executor):
    delivered = []
    worker.submit(lambda x: x * 2, lambda f: delivered.append(f.result()), 21)

    assert worker.poll() == 0
    executor.run_all()
    assert delivered == []

    assert worker.poll() == 1
    assert delivered == [42]
    assert worker.pending_count == 0


def test_exceptions_reach_the_callback(worker, executor):
    errors = []

    def fail():
        raise RuntimeError("boom")

    worker.submit(fail, lambda f: errors.append(f.exception()))
    executor.run_all()
    worker.poll()

    assert isinstance(errors[0], RuntimeError)


def test_unfinished_calls_stay_pending(worker, executor):
    delivered = []
    worker.submit(lambda: "first", lambda f: delivered.append(f.result()))
    worker.submit(lambda: "second", lambda f: delivered.append(f.result()))

    executor.run_next()
    assert worker.poll() == 1
    assert worker.pending_count == 1

    executor.run_next()
    worker.poll()
    assert delivered == ["first", "second"]


def test_shutdown_cancels_queued_calls(worker, executor):
    delivered = []
    future = worker.submit(lambda: 1, lambda f: delivered.append(f.result()))

    worker.shutdown()

    assert future.cancelled()
    assert worker.pending_count == 0
    assert delivered == []


def test_real_thread_pool(logger):
    worker = ServiceWorker(logger, executor=ThreadPoolExecutor(max_workers=1))
    delivered = []
    future = worker.submit(sum, lambda f: delivered.append(f.result()), [1, 2, 3])

    future.result(timeout=5)
    worker.poll()
    worker.shutdown(wait=True)

    assert delivered == [6]


def test_failing_callback_keeps_later_results(worker, executor):
    delivered = []

    def explode(future):
        raise ValueError("callback failed")

    worker.submit(lambda: "first", explode)
    worker.submit(lambda: "second", lambda f: delivered.append(f.result()))
    executor.run_all()

    with pytest.raises(ValueError, match="callback failed"):
        worker.poll()
    assert delivered == []
    assert worker.pending_count == 1

    assert worker.poll() == 1
    assert delivered == ["second"]
    assert worker.pending_count == 0
