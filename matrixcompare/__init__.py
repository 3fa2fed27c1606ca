from .access import (
    AccessType, DuplicatePolicy, Side, Matrix, DenseAccess, SparseAccess,
    AccessContractError, DenseIndexOutOfBoundsError, SparseEntryOutOfBoundsError, DuplicateSparseEntryError
)
from .adapters import NumpyDenseMatrix, TorchDenseMatrix, ScipySparseMatrix, TorchSparseMatrix, as_matrix
from .comparators import (
    ElementwiseComparator, ExactComparator, AbsoluteComparator, RelativeComparator, UlpComparator, FloatComparator
)
from .ulp import ulp_diff, UlpComparisonResult, UlpResultKind
from .outcome import ComparisonOutcome, Equal, DimensionMismatch, ValueMismatches, Mismatch
from .comparison import compare_matrices, matrices_equal
from .scalar import compare_scalars, ScalarMismatch
from .assertions import assert_matrix_eq, assert_scalar_eq, make_comparator
from .mock import MockDenseMatrix, MockSparseMatrix, mock_matrix
from . import config

__all__ = [
    "AccessType", "DuplicatePolicy", "Side", "Matrix", "DenseAccess", "SparseAccess",
    "AccessContractError", "DenseIndexOutOfBoundsError", "SparseEntryOutOfBoundsError", "DuplicateSparseEntryError",
    "NumpyDenseMatrix", "TorchDenseMatrix", "ScipySparseMatrix", "TorchSparseMatrix", "as_matrix",
    "ElementwiseComparator", "ExactComparator", "AbsoluteComparator", "RelativeComparator",
    "UlpComparator", "FloatComparator",
    "ulp_diff", "UlpComparisonResult", "UlpResultKind",
    "ComparisonOutcome", "Equal", "DimensionMismatch", "ValueMismatches", "Mismatch",
    "compare_matrices", "matrices_equal", "compare_scalars", "ScalarMismatch",
    "assert_matrix_eq", "assert_scalar_eq", "make_comparator",
    "MockDenseMatrix", "MockSparseMatrix", "mock_matrix", "config"
]
