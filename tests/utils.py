from matrixcompare.access import DenseAccess, SparseAccess
from matrixcompare.comparators import ElementwiseComparator, ExactComparator
from matrixcompare.mock import MockSparseMatrix


class CountingComparator(ElementwiseComparator):
    """
    Wraps a comparator and counts how many element pairs were compared.
    Has no vectorized form, hence the engine always takes the elementwise path.
    """
    def __init__(self, inner: ElementwiseComparator | None = None):
        self.inner = ExactComparator() if inner is None else inner
        self.calls = 0

    def _compare(self, a, b):
        self.calls += 1
        return self.inner.compare(a, b)

    def _describe(self) -> str:
        return self.inner.description()


class UntouchableDenseMatrix(DenseAccess):
    """
    Dense matrix failing the test if any element is accessed.
    """
    def __init__(self, rows: int, cols: int):
        self._rows = rows
        self._cols = cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def fetch_single(self, row: int, col: int):
        raise AssertionError(f"element ({row}, {col}) accessed")


class UntouchableSparseMatrix(SparseAccess):
    def __init__(self, rows: int, cols: int):
        self._rows = rows
        self._cols = cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def fetch_triplets(self):
        raise AssertionError("triplets accessed")


class CountingSparseMatrix(MockSparseMatrix):
    """
    Sparse mock counting the number of triplets handed out.
    """
    def __init__(self, rows: int, cols: int, triplets: list):
        super().__init__(rows, cols, triplets)
        self.triplets_fetched = 0

    def fetch_triplets(self):
        triplets = super().fetch_triplets()
        self.triplets_fetched += len(triplets)
        return triplets
