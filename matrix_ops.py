import numpy as np

from matmul_errors import InvalidDimension


def transpose(M):
    """
    Return a new row-major matrix T with T[j, i] == M[i, j].

    The copy costs O(N^2) time and memory, which is negligible next to the
    O(N^3) multiplication that reads it. The input is never modified and the
    result never shares memory with it.

    Args:
        M: Matrix of shape (n, n)

    Returns:
        T: Transposed copy of M, C-contiguous
    """
    M = np.asarray(M, dtype=np.float64)
    # M.T is a view; copy(order="C") forces a fresh row-major buffer even
    # when M is Fortran ordered and M.T would already be contiguous
    return M.T.copy(order="C")


def check_size(N):
    if isinstance(N, bool) or not isinstance(N, (int, np.integer)):
        raise InvalidDimension(f"N must be an integer, got {N!r}")
    if N < 0:
        raise InvalidDimension(f"N must be non-negative, got {N}")
    return int(N)


def as_operand(name, M, N):
    """Convert an input operand to a float64 row-major (N, N) array."""
    try:
        M = np.ascontiguousarray(M, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidDimension(f"{name} is not a rectangular matrix of numbers") from e
    if M.shape != (N, N):
        raise InvalidDimension(f"{name} has shape {M.shape}, expected ({N}, {N})")
    return M


def check_output(C, N):
    if not isinstance(C, np.ndarray):
        raise InvalidDimension(f"C must be a numpy array, got {type(C).__name__}")
    if C.shape != (N, N):
        raise InvalidDimension(f"C has shape {C.shape}, expected ({N}, {N})")
    if not np.issubdtype(C.dtype, np.floating):
        raise InvalidDimension(f"C must have a floating dtype, got {C.dtype}")
    if not C.flags.writeable:
        raise InvalidDimension("C is read-only")


def validate_operands(A, B, C, N):
    """
    Check the preconditions shared by both multipliers.

    Nothing is written to C here; any violation raises InvalidDimension
    before the caller starts computing.

    Returns:
        (N, A, B) with A and B as float64 row-major arrays
    """
    N = check_size(N)
    A = as_operand("A", A, N)
    B = as_operand("B", B, N)
    check_output(C, N)
    return N, A, B


def compute_block(a_rows, bt_rows):
    """
    Compute one rectangular block of C from rows of A and rows of Bt.

    Cell (r, c) of the block is the dot product of a_rows[r] and bt_rows[c],
    accumulated from 0.0 with k ascending, the same order the sequential
    multiplier uses, so both paths round identically.

    Args:
        a_rows: Rows i0..i1 of A, shape (rows, n)
        bt_rows: Rows j0..j1 of the transposed B, shape (cols, n)

    Returns:
        block: Array of shape (rows, cols)
    """
    a_list = np.asarray(a_rows, dtype=np.float64).tolist()
    bt_list = np.asarray(bt_rows, dtype=np.float64).tolist()
    block = np.empty((len(a_list), len(bt_list)), dtype=np.float64)

    for r, a_row in enumerate(a_list):
        for c, bt_row in enumerate(bt_list):
            # Both rows are contiguous, so k walks memory linearly
            total = 0.0
            for a, b in zip(a_row, bt_row):
                total += a * b
            block[r, c] = total

    return block
