import os
import threading
import time

import numpy as np
import pytest

from dispatch import create_executor, dispatch_chunks
from matrix_ops import compute_block
from matmul_errors import InvalidConfiguration, InvalidDimension, WorkerPoolError


def slow_square(x):
    # Later tasks finish first; results must still come back in task order
    time.sleep(0.001 * (10 - x))
    return x * x


def test_results_keep_task_order():
    assert dispatch_chunks(slow_square, [(x,) for x in range(10)], workers=4) == [x * x for x in range(10)]


def test_no_tasks_gives_no_results():
    assert dispatch_chunks(slow_square, [], workers=2) == []


def test_uses_worker_threads():
    names = dispatch_chunks(lambda: threading.current_thread().name, [()] * 4, workers=2)
    assert all(name.startswith("matmul") for name in names)


def test_failure_is_wrapped_and_chained():
    def kernel(x):
        if x == 2:
            raise ZeroDivisionError("boom")
        return x

    with pytest.raises(WorkerPoolError) as excinfo:
        dispatch_chunks(kernel, [(x,) for x in range(5)], workers=2)
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_library_errors_are_not_wrapped():
    def kernel():
        raise InvalidDimension("bad block")

    with pytest.raises(InvalidDimension):
        dispatch_chunks(kernel, [()], workers=1)


def test_pending_tasks_are_cancelled_after_failure():
    started = []

    def kernel(x):
        started.append(x)
        if x == 0:
            raise RuntimeError("first task fails")
        time.sleep(0.01)
        return x

    with pytest.raises(WorkerPoolError):
        dispatch_chunks(kernel, [(x,) for x in range(50)], workers=1)
    assert len(started) < 50


@pytest.mark.parametrize("workers", [0, -1, None])
def test_invalid_worker_count(workers):
    with pytest.raises(InvalidConfiguration):
        create_executor("thread", workers)


def test_unknown_backend():
    with pytest.raises(InvalidConfiguration):
        create_executor("gpu", 2)


def test_process_backend_runs_in_worker_processes():
    pids = dispatch_chunks(os.getpid, [()] * 4, workers=2, backend="process")
    assert len(pids) == 4
    assert os.getpid() not in pids


def test_process_backend_computes_blocks_in_order():
    rows = np.arange(12, dtype=np.float64).reshape(3, 4)
    tasks = [(rows[i:i + 1], rows) for i in range(3)]
    blocks = dispatch_chunks(compute_block, tasks, workers=2, backend="process")
    assert [block.shape for block in blocks] == [(1, 3)] * 3
    assert np.array_equal(np.vstack(blocks), rows @ rows.T)


def test_mpi_backend_builds_an_mpi_pool():
    futures = pytest.importorskip("mpi4py.futures")
    executor = create_executor("mpi", 2)
    try:
        assert isinstance(executor, futures.MPIPoolExecutor)
    finally:
        executor.shutdown(wait=False)
