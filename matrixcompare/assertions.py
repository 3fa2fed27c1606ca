"""
Assertions for test suites.

Available comparators, selected by name:
    exact: x == y
    abs:   |x - y| <= tol
    rel:   |x - y| <= tol * max(|x|, |y|)
    ulp:   ULP difference <= tol
    float: absolute comparison with a tolerance eps close to machine epsilon,
           followed by an ULP-based comparison with tolerance ulp

Examples:
    >>> assert_matrix_eq(x, y)
    >>> assert_matrix_eq(x, y, comp="abs", tol=1e-12)
    >>> assert_matrix_eq(x, y, comp="float", eps=1e-14, ulp=8)
"""
import logging

from matrixcompare.comparators import (
    ElementwiseComparator, ExactComparator, AbsoluteComparator, RelativeComparator, UlpComparator, FloatComparator
)
from matrixcompare.comparison import compare_matrices
from matrixcompare.outcome import MAX_MISMATCH_REPORTS
from matrixcompare.scalar import compare_scalars

log_module = logging.getLogger(__name__)

COMPARATOR_NAMES = ("exact", "abs", "rel", "ulp", "float")


def make_comparator(comp: str = "exact", tol: float | int | None = None, eps: float | None = None,
                    ulp: int | None = None, nan_equal: bool = False) -> ElementwiseComparator:
    """
    Build a comparator by name.
    tol is required for abs, rel and ulp. eps and ulp are optional and only valid for float.
    """
    def reject(option: str):
        err = f"Option '{option}' is not valid for comparator '{comp}'."
        log_module.error(err)
        raise ValueError(err)

    def require_tol():
        if tol is None:
            err = f"Comparator '{comp}' requires a tolerance 'tol'."
            log_module.error(err)
            raise ValueError(err)

    if comp not in COMPARATOR_NAMES:
        err = f"Unknown comparator '{comp}', choose one of {COMPARATOR_NAMES}."
        log_module.error(err)
        raise ValueError(err)
    if comp != "float":
        if eps is not None:
            reject("eps")
        if ulp is not None:
            reject("ulp")

    match comp:
        case "exact":
            if tol is not None:
                reject("tol")
            return ExactComparator(nan_equal=nan_equal)
        case "abs":
            require_tol()
            return AbsoluteComparator(tol=tol, nan_equal=nan_equal)
        case "rel":
            require_tol()
            return RelativeComparator(tol=tol, nan_equal=nan_equal)
        case "ulp":
            require_tol()
            return UlpComparator(tol=tol, nan_equal=nan_equal)
        case _:
            if tol is not None:
                reject("tol")
            comparator = FloatComparator(nan_equal=nan_equal)
            if eps is not None:
                comparator = comparator.with_eps(eps)
            if ulp is not None:
                comparator = comparator.with_ulp(ulp)
            return comparator


def assert_matrix_eq(x, y, comp: str | ElementwiseComparator = "exact",
                     max_reports: int = MAX_MISMATCH_REPORTS, **options):
    """
    Assert that matrices x and y compare equal, raising an AssertionError with a report otherwise.
    :param x: left matrix
    :param y: right matrix
    :param comp: comparator name or comparator instance
    :param max_reports: maximum number of mismatched positions listed in the report
    :param options: comparator options, tol, eps, ulp, nan_equal
    """
    comparator = comp if isinstance(comp, ElementwiseComparator) else make_comparator(comp, **options)
    outcome = compare_matrices(x, y, comparator)
    if not outcome.is_equal:
        raise AssertionError("\n" + outcome.report(max_reports=max_reports))


def assert_scalar_eq(x, y, comp: str | ElementwiseComparator = "exact", **options):
    comparator = comp if isinstance(comp, ElementwiseComparator) else make_comparator(comp, **options)
    mismatch = compare_scalars(x, y, comparator)
    if mismatch is not None:
        raise AssertionError("\n" + mismatch.report())
