#!/usr/bin/env python3
import numpy as np
import time
import sys

from matrix_ops import validate_operands


def matrix_multiply_sequential(A, B, C, N):
    """
    Compute C = A x B in place, one cell at a time.

    This is the reference implementation the parallel path is checked
    against: cells are visited in row-major order and each dot product is
    accumulated from 0.0 with k ascending.

    Args:
        A: First matrix of shape (N, N)
        B: Second matrix of shape (N, N)
        C: Output matrix of shape (N, N), overwritten with the product
        N: Size of the matrices

    Raises:
        InvalidDimension: if the shapes do not match N; C is left untouched
    """
    N, A, B = validate_operands(A, B, C, N)

    # Plain Python floats keep the rounding identical to compute_block
    a_rows = A.tolist()
    b_rows = B.tolist()

    # Standard matrix multiplication algorithm: C[i,j] = sum(A[i,k] * B[k,j])
    for i in range(N):
        a_row = a_rows[i]
        for j in range(N):
            total = 0.0
            for k in range(N):
                total += a_row[k] * b_rows[k][j]
            C[i, j] = total


def main():
    # Check command line arguments
    if len(sys.argv) != 2:
        print("Usage: python matmul_seq.py N")
        sys.exit(1)

    try:
        N = int(sys.argv[1])
        if N <= 0:
            raise ValueError("N must be positive")
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
    matrix_multiply_sequential(A, B, C, N)
    end_time = time.perf_counter()
    execution_time = end_time - start_time

    # Verify result for small matrices (optional validation)
    if N <= 10:
        numpy_result = np.dot(A, B)
        error = np.max(np.abs(C - numpy_result))
        print(f"Maximum error compared to NumPy: {error:.6e}")

    print(f"Tiempo de ejecución secuencial para N={N}: {execution_time:.6f} segundos")
    return execution_time


if __name__ == "__main__":
    main()
