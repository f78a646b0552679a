#!/usr/bin/env python3
import numpy as np
import time
import sys

from dispatch import dispatch_chunks
from matmul_config import ParallelConfig
from matmul_logger import create_logger
from matrix_ops import compute_block, transpose, validate_operands
from partition import count_chunks, partition_index_space

logger = create_logger(__name__)


def matrix_multiply_parallel(A, B, C, N, chunk_size=None, workers=None, backend=None):
    """
    Compute C = A x B in place using a pool of workers.

    B is transposed first so that every dot product reads a row of A and a
    row of Bt, both contiguous in memory. The N x N output is then split
    into chunk_size x chunk_size chunks, one task per chunk. Chunks never
    share output cells, so workers run without locks; C is only written once
    every chunk has completed. Each cell is accumulated with k ascending, so
    the result matches matrix_multiply_sequential bit for bit.

    Args:
        A: First matrix of shape (N, N)
        B: Second matrix of shape (N, N)
        C: Output matrix of shape (N, N), overwritten with the product
        N: Size of the matrices
        chunk_size: Side length of a chunk (default 16, or MATMUL_CHUNK_SIZE)
        workers: Pool size (default os.cpu_count(), or MATMUL_WORKERS)
        backend: "process", "thread" or "mpi" (default "process", or MATMUL_BACKEND)

    Raises:
        InvalidDimension: if the shapes do not match N
        InvalidConfiguration: if chunk_size, workers or backend are invalid
        WorkerPoolError: if a worker fails; C is left untouched
    """
    N, A, B = validate_operands(A, B, C, N)
    # Explicit arguments win over MATMUL_* environment settings
    config = ParallelConfig.from_env(chunk_size=chunk_size, workers=workers, backend=backend)

    if N == 0:
        return

    # Bt is complete before any task is submitted and never written afterwards
    Bt = transpose(B)

    chunks = list(partition_index_space(N, config.chunk_size))
    logger.debug(
        f"Multiplying N={N} in {len(chunks)} chunks of {config.chunk_size}x{config.chunk_size} "
        f"on {config.workers} {config.backend} workers"
    )

    # Workers only receive the rows they read
    tasks = [(A[chunk.rows], Bt[chunk.cols]) for chunk in chunks]
    blocks = dispatch_chunks(compute_block, tasks, config.workers, config.backend)

    for chunk, block in zip(chunks, blocks):
        C[chunk.rows, chunk.cols] = block


def main():
    # Check command line arguments
    if len(sys.argv) not in (2, 3, 4):
        print("Usage: python matmul_par.py N [chunk_size] [workers]")
        sys.exit(1)

    try:
        N = int(sys.argv[1])
        if N <= 0:
            raise ValueError("N must be positive")
        chunk_size = int(sys.argv[2]) if len(sys.argv) > 2 else None
        workers = int(sys.argv[3]) if len(sys.argv) > 3 else None
        config = ParallelConfig.from_env(chunk_size=chunk_size, workers=workers)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Generate random matrices
    np.random.seed(42)  # For reproducibility
    A = np.random.uniform(0, 1, (N, N))
    B = np.random.uniform(0, 1, (N, N))
    C = np.zeros((N, N), dtype=np.float64)

    # Time the multiplication
    start_time = time.perf_counter()
    matrix_multiply_parallel(A, B, C, N, config.chunk_size, config.workers, config.backend)
    end_time = time.perf_counter()
    execution_time = end_time - start_time

    # Verify result for small matrices (optional validation)
    if N <= 10:
        numpy_result = np.dot(A, B)
        error = np.max(np.abs(C - numpy_result))
        print(f"Maximum error compared to NumPy: {error:.6e}")

    print(f"Chunks: {count_chunks(N, config.chunk_size)} de {config.chunk_size}x{config.chunk_size}")
    print(f"Tiempo de ejecución paralelo para N={N} con {config.workers} trabajadores: {execution_time:.6f} segundos")
    return execution_time


if __name__ == "__main__":
    main()
