"""
Mock matrices and random matrix generation.
Used by the test suite and by property style tests of libraries building on matrixcompare.
"""
import logging

import numpy as np

from matrixcompare.access import DenseAccess, SparseAccess, DuplicatePolicy

log_module = logging.getLogger(__name__)


class MockDenseMatrix(DenseAccess):
    """
    Row-major dense matrix without numpy backing, exposes element access only.
    """
    def __init__(self, rows: int, cols: int, data: list):
        if rows * cols != len(data):
            err = f"Data must have rows*cols = {rows * cols} elements, got {len(data)}."
            log_module.error(err)
            raise ValueError(err)
        self._rows: int = rows
        self._cols: int = cols
        self.data: list = list(data)

    @classmethod
    def from_row_major(cls, rows: int, cols: int, data: list) -> "MockDenseMatrix":
        return cls(rows, cols, data)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def fetch_single(self, row: int, col: int):
        self.check_index(row, col)
        return self.data[row * self._cols + col]


class MockSparseMatrix(SparseAccess):
    def __init__(self, rows: int, cols: int, triplets: list[tuple[int, int, object]],
                 duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR, zero=0):
        self._rows: int = rows
        self._cols: int = cols
        self.triplets: list = list(triplets)
        self.duplicate_policy = duplicate_policy
        self._zero = zero

    @classmethod
    def from_triplets(cls, rows: int, cols: int, triplets: list[tuple[int, int, object]],
                      duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR) -> "MockSparseMatrix":
        return cls(rows, cols, triplets, duplicate_policy=duplicate_policy)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def fetch_triplets(self) -> list[tuple[int, int, object]]:
        return list(self.triplets)

    def nnz(self) -> int:
        return len(self.triplets)

    def zero(self):
        return self._zero

    def to_dense(self) -> MockDenseMatrix:
        data = [self._zero] * (self._rows * self._cols)
        for row, col, value in self.triplets:
            if not (0 <= row < self._rows and 0 <= col < self._cols):
                err = f"Triplet ({row}, {col}) out of bounds for shape {(self._rows, self._cols)}."
                log_module.error(err)
                raise ValueError(err)
            idx = row * self._cols + col
            if self.duplicate_policy == DuplicatePolicy.SUM:
                data[idx] = data[idx] + value
            else:
                data[idx] = value
        return MockDenseMatrix(self._rows, self._cols, data)


def mock_matrix(rows: list[list]) -> MockDenseMatrix:
    """
    Build a dense mock matrix from a list of rows, e.g. mock_matrix([[1, 2], [3, 4]]).
    """
    num_rows = len(rows)
    num_cols = len(rows[0]) if rows else 0
    if any(len(r) != num_cols for r in rows):
        err = "All rows must have the same number of columns."
        log_module.error(err)
        raise ValueError(err)
    return MockDenseMatrix(num_rows, num_cols, [v for r in rows for v in r])


def random_dense(rows: int, cols: int, rng: np.random.Generator, density: float = 1.0,
                 low: int = -5, high: int = 5) -> np.ndarray:
    """
    Random integer valued float matrix, entries are zeroed with probability 1 - density.
    Integer values keep comparisons of converted representations exact.
    """
    values = rng.integers(low, high, size=(rows, cols), endpoint=True).astype(np.float64)
    mask = rng.random((rows, cols)) < density
    return np.where(mask, values, 0.0)


def random_sparse(rows: int, cols: int, nnz: int, rng: np.random.Generator,
                  low: int = -5, high: int = 5) -> MockSparseMatrix:
    """
    Random sparse mock matrix with nnz distinct explicit entries, in random order.
    Explicit entries may be zero.
    """
    nnz = min(nnz, rows * cols)
    linear = rng.choice(rows * cols, size=nnz, replace=False)
    values = rng.integers(low, high, size=nnz, endpoint=True).astype(np.float64)
    triplets = [(int(i // cols), int(i % cols), float(v)) for i, v in zip(linear, values)]
    return MockSparseMatrix(rows, cols, triplets, zero=0.0)


def sparse_from_dense(dense: np.ndarray, rng: np.random.Generator | None = None,
                      explicit_zeros: int = 0) -> MockSparseMatrix:
    """
    Sparse mock matrix holding the same logical values as a dense array.
    Optionally stores a number of zero entries explicitly and shuffles the triplet order.
    """
    rows, cols = dense.shape
    idx_rows, idx_cols = np.nonzero(dense)
    triplets = [(int(r), int(c), dense[r, c].item()) for r, c in zip(idx_rows, idx_cols)]
    if rng is not None:
        zero_rows, zero_cols = np.nonzero(dense == 0)
        num_zeros = min(explicit_zeros, zero_rows.shape[0])
        pick = rng.choice(zero_rows.shape[0], size=num_zeros, replace=False)
        triplets.extend((int(zero_rows[p]), int(zero_cols[p]), 0.0) for p in pick)
        triplets = [triplets[i] for i in rng.permutation(len(triplets))]
    return MockSparseMatrix(rows, cols, triplets, zero=0.0)
