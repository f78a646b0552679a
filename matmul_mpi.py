from mpi4py.futures import MPIPoolExecutor

from matmul_logger import create_logger

logger = create_logger(__name__)


def create_mpi_executor(workers):
    """
    Pool of MPI worker processes for the parallel multiplier.

    Each chunk is sent to a worker together with the row slices of A and Bt
    it reads; the computed block comes back to the caller, which writes it
    into C. Run under `mpiexec -n 1 python -m mpi4py.futures ...` or rely on
    dynamic process spawning when the MPI implementation supports it.

    Args:
        workers: Number of MPI worker processes

    Returns:
        MPIPoolExecutor
    """
    logger.debug(f"Starting MPI pool with {workers} workers")
    return MPIPoolExecutor(max_workers=workers)
