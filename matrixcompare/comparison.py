"""
Comparison engine for dense and sparse matrices.

Two matrices are compared position by position, but only at candidate positions:
every position of a dense operand (its nnz is rows * cols by convention) and the explicit entries
of a sparse operand. Positions that are implicitly zero in two sparse operands are never visited,
since any admissible comparator considers zero equal to zero.
The total work is O(nnz(X) log nnz(X) + nnz(Y) log nnz(Y)).
"""
import itertools
import logging

import numpy as np

from matrixcompare.access import (
    AccessType, DenseAccess, SparseAccess, Side, AccessContractError, build_triplet_map
)
from matrixcompare.adapters import as_matrix
from matrixcompare.comparators import ElementwiseComparator, ExactComparator
from matrixcompare.outcome import ComparisonOutcome, Equal, DimensionMismatch, ValueMismatches, Mismatch

log_module = logging.getLogger(__name__)


def _triplet_map(matrix: SparseAccess, side: Side) -> dict:
    try:
        return build_triplet_map(matrix)
    except AccessContractError as e:
        raise e.with_side(side) from e


def _collect_mismatches(positions, fetch_left, fetch_right, comparator: ElementwiseComparator) -> list[Mismatch]:
    mismatches = []
    for row, col in positions:
        a = fetch_left(row, col)
        b = fetch_right(row, col)
        reason = comparator.compare(a, b)
        if reason is not None:
            mismatches.append(Mismatch(row=row, col=col, left=a, right=b, reason=reason))
    return mismatches


def _compare_dense_dense(left: DenseAccess, right: DenseAccess,
                         comparator: ElementwiseComparator) -> list[Mismatch]:
    rows, cols = left.rows, left.cols
    left_array, right_array = left.to_numpy(), right.to_numpy()
    if left_array is not None and right_array is not None:
        mask = comparator.equal_array(left_array, right_array)
        if mask is not None:
            # only positions failing the vectorized check are re-evaluated elementwise,
            # np.nonzero returns them in row-major order
            idx_rows, idx_cols = np.nonzero(~mask)
            log_module.debug(f"dense - dense comparison | vectorized | {idx_rows.shape[0]} candidate positions")
            return _collect_mismatches(
                zip(idx_rows.tolist(), idx_cols.tolist()),
                lambda r, c: left_array[r, c], lambda r, c: right_array[r, c],
                comparator
            )
    log_module.debug(f"dense - dense comparison | elementwise | {rows * cols} candidate positions")
    return _collect_mismatches(
        itertools.product(range(rows), range(cols)), left.fetch_single, right.fetch_single, comparator
    )


def _compare_dense_sparse(dense: DenseAccess, sparse: SparseAccess, comparator: ElementwiseComparator,
                          swap: bool) -> list[Mismatch]:
    # swap: the sparse operand is the left one
    entries = _triplet_map(sparse, Side.LEFT if swap else Side.RIGHT)
    zero = sparse.zero()

    def fetch_sparse(row: int, col: int):
        return entries.get((row, col), zero)

    rows, cols = dense.rows, dense.cols
    log_module.debug(f"dense - sparse comparison | {rows * cols} candidate positions | nnz sparse {len(entries)}")
    positions = itertools.product(range(rows), range(cols))
    if swap:
        return _collect_mismatches(positions, fetch_sparse, dense.fetch_single, comparator)
    return _collect_mismatches(positions, dense.fetch_single, fetch_sparse, comparator)


def _compare_sparse_sparse(left: SparseAccess, right: SparseAccess,
                           comparator: ElementwiseComparator) -> list[Mismatch]:
    left_entries = _triplet_map(left, Side.LEFT)
    right_entries = _triplet_map(right, Side.RIGHT)
    left_zero, right_zero = left.zero(), right.zero()

    # sorting the union gives output independent of triplet order and of operand order
    candidates = sorted(left_entries.keys() | right_entries.keys())
    log_module.debug(f"sparse - sparse comparison | {len(candidates)} candidate positions")
    return _collect_mismatches(
        candidates,
        lambda r, c: left_entries.get((r, c), left_zero),
        lambda r, c: right_entries.get((r, c), right_zero),
        comparator
    )


def compare_matrices(left, right, comparator: ElementwiseComparator | None = None) -> ComparisonOutcome:
    """
    Compare two matrices elementwise.

    The operands may be any Matrix implementation or an object accepted by as_matrix
    (numpy arrays, scipy.sparse matrices, torch tensors, nested lists), and need not share the access type.

    :param left: matrix X
    :param right: matrix Y
    :param comparator: elementwise comparator, defaults to exact equality
    :return: Equal, DimensionMismatch or ValueMismatches with mismatches sorted by (row, col)
    :raises AccessContractError: if an operand's adapter violates the access contract
    """
    if comparator is None:
        comparator = ExactComparator()
    left, right = as_matrix(left), as_matrix(right)

    if left.shape != right.shape:
        return DimensionMismatch(left_shape=left.shape, right_shape=right.shape)

    match left.access_type, right.access_type:
        case AccessType.DENSE, AccessType.DENSE:
            mismatches = _compare_dense_dense(left, right, comparator)
        case AccessType.DENSE, AccessType.SPARSE:
            mismatches = _compare_dense_sparse(left, right, comparator, swap=False)
        case AccessType.SPARSE, AccessType.DENSE:
            mismatches = _compare_dense_sparse(right, left, comparator, swap=True)
        case AccessType.SPARSE, AccessType.SPARSE:
            mismatches = _compare_sparse_sparse(left, right, comparator)
        case _:
            err = f"Unknown access types: {left.access_type}, {right.access_type}."
            log_module.error(err)
            raise ValueError(err)

    if not mismatches:
        return Equal()
    return ValueMismatches(comparator_description=comparator.description(), mismatches=tuple(mismatches))


def matrices_equal(left, right, comparator: ElementwiseComparator | None = None) -> bool:
    """
    Boolean entry point, e.g. for property based test harnesses that need to shrink failures.
    """
    return compare_matrices(left, right, comparator).is_equal
