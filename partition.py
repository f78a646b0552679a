from dataclasses import dataclass
from typing import Iterator, Tuple

from matmul_config import check_positive_int
from matrix_ops import check_size


@dataclass(frozen=True)
class Chunk:
    """Half-open rectangle [row_start, row_stop) x [col_start, col_stop) of the output."""
    row_start: int
    row_stop: int
    col_start: int
    col_stop: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.row_stop - self.row_start, self.col_stop - self.col_start

    @property
    def rows(self) -> slice:
        return slice(self.row_start, self.row_stop)

    @property
    def cols(self) -> slice:
        return slice(self.col_start, self.col_stop)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for i in range(self.row_start, self.row_stop):
            for j in range(self.col_start, self.col_stop):
                yield i, j


def _bounds(N, chunk_size):
    for start in range(0, N, chunk_size):
        yield start, min(start + chunk_size, N)


def partition_index_space(N, chunk_size) -> Iterator[Chunk]:
    """
    Split the N x N output index space into square chunks.

    Chunks come out in row-major order of their top-left corner. The last
    chunk along each axis is cut short when chunk_size does not divide N, so
    together the chunks cover every (i, j) exactly once.

    Args:
        N: Matrix dimension
        chunk_size: Nominal side length of a chunk

    Returns:
        Iterator over Chunk descriptors (empty for N == 0)
    """
    N = check_size(N)
    chunk_size = check_positive_int("chunk_size", chunk_size)
    # Checked here rather than on the first next()
    return _chunks(N, chunk_size)


def _chunks(N, chunk_size):
    for row_start, row_stop in _bounds(N, chunk_size):
        for col_start, col_stop in _bounds(N, chunk_size):
            yield Chunk(row_start, row_stop, col_start, col_stop)


def count_chunks(N, chunk_size) -> int:
    N = check_size(N)
    chunk_size = check_positive_int("chunk_size", chunk_size)
    per_axis = -(-N // chunk_size)
    return per_axis * per_axis
