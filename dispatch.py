from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from matmul_config import BACKENDS, check_positive_int
from matmul_errors import InvalidConfiguration, MatrixMultiplyError, WorkerPoolError
from matmul_logger import create_logger

logger = create_logger(__name__)


def create_executor(backend, workers):
    """
    Build the worker pool chunks are dispatched to.

    Args:
        backend: "process" for local worker processes, "thread" for an in-process
            thread pool, "mpi" for MPI worker processes
        workers: Maximum number of concurrent workers

    Returns:
        An Executor usable as a context manager
    """
    workers = check_positive_int("workers", workers)
    if backend == "process":
        # The pure-Python kernel holds the GIL, so real parallelism needs processes
        return ProcessPoolExecutor(max_workers=workers)
    if backend == "thread":
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="matmul")
    if backend == "mpi":
        # Imported lazily so the local backends work without an MPI installation
        from matmul_mpi import create_mpi_executor
        return create_mpi_executor(workers)
    raise InvalidConfiguration(f"Unknown backend {backend!r}. Expected one of {BACKENDS}")


def dispatch_chunks(kernel, tasks, workers, backend="thread"):
    """
    Run kernel(*args) for every args tuple in tasks and wait for all of them.

    This is the fork-join point of the parallel path: the call blocks until
    every task has finished. Results come back in the order of tasks. If any
    task fails the ones that have not started are cancelled and the failure
    is raised as WorkerPoolError, so callers never see a partial result.

    Args:
        kernel: Picklable callable executed by the workers
        tasks: Iterable of argument tuples, one per unit of work
        workers: Pool size
        backend: Name of the worker pool (see create_executor)

    Returns:
        List of kernel results, aligned with tasks
    """
    executor = create_executor(backend, workers)
    with executor:
        futures = []
        try:
            for args in tasks:
                futures.append(executor.submit(kernel, *args))
            return [future.result() for future in futures]
        except Exception as e:
            for future in futures:
                future.cancel()
            logger.error(f"Worker failed, aborting {len(futures)} tasks: {e!r}")
            if isinstance(e, MatrixMultiplyError):
                raise
            raise WorkerPoolError(f"Worker pool failed while computing chunks: {e}") from e
