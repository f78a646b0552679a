class MatrixMultiplyError(Exception):
    """Base class for every error raised by the multiplication routines."""


class InvalidDimension(MatrixMultiplyError, ValueError):
    """A, B and C are not all N x N, or N itself is not a valid size."""


class InvalidConfiguration(MatrixMultiplyError, ValueError):
    """Bad chunk size, worker count or backend for the parallel path."""


class WorkerPoolError(MatrixMultiplyError, RuntimeError):
    """A worker failed while computing a chunk; no partial result is kept."""
