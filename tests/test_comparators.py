import math

import numpy as np
import pytest

from matrixcompare.comparators import (
    ExactComparator, AbsoluteComparator, RelativeComparator, UlpComparator, FloatComparator
)
from matrixcompare.ulp import next_float
from matrixcompare import compare_matrices, Equal

nan = float("nan")
inf = float("inf")


def test_absolute_comparator_integer():
    comp = AbsoluteComparator(tol=1)

    assert comp.compare(0, 0) is None
    assert comp.compare(1, 0) is None
    assert comp.compare(-1, 0) is None
    assert comp.compare(2, 0) == "Absolute error: 2."
    assert comp.compare(-2, 0) == "Absolute error: 2."


def test_absolute_comparator_floating_point():
    comp = AbsoluteComparator(tol=1.0)

    assert comp.equal(0.0, 0.0)
    assert comp.equal(1.0, 0.0)
    assert comp.equal(-1.0, 0.0)
    assert comp.compare(2.0, 0.0) == "Absolute error: 2.0."
    assert comp.compare(-2.0, 0.0) == "Absolute error: 2.0."


def test_absolute_comparator_unsigned_does_not_wrap():
    comp = AbsoluteComparator(tol=2)
    assert comp.equal(np.uint8(3), np.uint8(5))
    assert comp.equal(np.uint8(5), np.uint8(3))
    assert not comp.equal(np.uint8(3), np.uint8(250))


@pytest.mark.parametrize("tol", [1e-12, 0.5, 3.0, 1e8])
def test_absolute_comparator_tolerance_is_not_strict(tol):
    comp = AbsoluteComparator(tol=tol)
    assert comp.equal(tol, 0.0)
    assert not comp.equal(next_float(tol), 0.0)


@pytest.mark.parametrize("a, b", [(0.1, 0.3), (-2.5, 1e-3), (1e10, -1e10), (3, 7)])
def test_absolute_comparator_is_symmetric(a, b):
    for tol in [0.0, 0.2, 1.0, 10.0]:
        comp = AbsoluteComparator(tol=tol)
        assert comp.compare(a, b) == comp.compare(b, a)


def test_absolute_comparator_non_finite():
    comp = AbsoluteComparator(tol=1.0)
    assert comp.equal(inf, inf)
    assert not comp.equal(inf, -inf)
    assert not comp.equal(inf, 1.0)
    assert not comp.equal(nan, nan)
    assert not comp.equal(nan, 1.0)


def test_exact_comparator():
    comp = ExactComparator()

    assert comp.equal(0, 0)
    assert not comp.equal(1, 0)
    assert not comp.equal(1, -1)
    assert comp.compare(1, 0) == ""
    assert comp.equal(0.0, 0.0)
    assert comp.equal(-0.0, 0.0)
    assert not comp.equal(nan, 5.0)
    assert not comp.equal(nan, nan)


def test_nan_equal_configuration():
    for comp in [ExactComparator(nan_equal=True), AbsoluteComparator(tol=1e-3, nan_equal=True),
                 RelativeComparator(tol=1e-3, nan_equal=True), UlpComparator(tol=4, nan_equal=True),
                 FloatComparator(nan_equal=True)]:
        assert comp.equal(nan, nan)
        assert comp.equal(np.float32("nan"), np.float32("nan"))
        assert not comp.equal(nan, 1.0)
        assert not comp.equal(0.0, nan)
        assert "NaN compares equal to NaN." in comp.description()


def test_relative_comparator():
    comp = RelativeComparator(tol=0.1)

    assert comp.equal(100.0, 95.0)
    assert comp.equal(100.0, 90.0)
    assert comp.compare(100.0, 80.0) == "Relative error: 0.2."
    assert comp.equal(-100.0, -95.0)
    assert not comp.equal(-100.0, 100.0)


def test_relative_comparator_zero_handling():
    comp = RelativeComparator(tol=0.1)
    # both zero always match
    assert comp.equal(0.0, 0.0)
    assert comp.equal(0.0, -0.0)
    assert comp.equal(0, 0)
    # exactly one zero: compared against tol * |non zero|, only holds for tol >= 1
    assert not comp.equal(0.0, 1e-300)
    assert not comp.equal(1e-300, 0.0)
    assert RelativeComparator(tol=1.0).equal(0.0, 2.0)
    assert RelativeComparator(tol=1.0).equal(2.0, 0.0)


@pytest.mark.parametrize("a, b", [(0.0, 1.0), (1.0, 0.0), (3.0, 3.3), (-1.0, 1.0), (1e-8, 2e-8), (0.0, 0.0)])
@pytest.mark.parametrize("tol", [0.0, 0.05, 0.1, 0.5, 1.0])
def test_relative_comparator_is_symmetric(a, b, tol):
    comp = RelativeComparator(tol=tol)
    assert comp.compare(a, b) == comp.compare(b, a)


def test_relative_comparator_non_finite():
    comp = RelativeComparator(tol=0.5)
    assert comp.equal(inf, inf)
    assert comp.compare(inf, 1.0) == "Non-finite difference."
    assert not comp.equal(-inf, inf)
    assert not comp.equal(nan, nan)


def test_ulp_comparator_f64():
    comp = UlpComparator(tol=1)

    assert comp.equal(0.0, 0.0)
    assert comp.equal(0.0, -0.0)
    assert comp.compare(-1.0, 1.0) == "Numbers have incompatible signs."
    assert comp.compare(nan, 0.0) == ""
    assert comp.compare(nan, nan) == ""
    assert comp.equal(1.0, next_float(1.0))
    assert comp.compare(1.0, next_float(1.0, 2)) == "Difference: 2 ULP."


def test_ulp_comparator_next_float_inside_tolerance():
    for x in [1e-300, 0.1, 1.0, 3.5, 1e200, -7.25]:
        y = next_float(x)
        assert UlpComparator(tol=0).compare(x, y) == "Difference: 1 ULP."
        assert UlpComparator(tol=1).equal(x, y)


def test_ulp_comparator_infinity():
    comp = UlpComparator(tol=10)
    max_float = np.finfo(np.float64).max
    assert comp.equal(inf, inf)
    assert comp.equal(-inf, -inf)
    assert not comp.equal(inf, -inf)
    assert comp.compare(max_float, inf) == "Infinite value mismatch."


def test_float_comparator():
    comp = FloatComparator()
    assert comp.equal(1.0, 1.0)
    assert comp.equal(0.0, 1e-16)
    assert comp.equal(1.0, next_float(1.0, 4))
    assert comp.compare(1.0, 2.0).startswith("Difference:")
    assert comp.compare(-1.0, 1.0) == "Numbers have incompatible signs."


def test_float_comparator_builders():
    comp = FloatComparator().with_eps(0.0).with_ulp(1)
    assert comp.eps == 0.0 and comp.ulp == 1
    assert comp.equal(1.0, next_float(1.0))
    assert not comp.equal(1.0, next_float(1.0, 2))
    # large eps makes the ulp part irrelevant
    assert FloatComparator().with_eps(1.0).with_ulp(0).equal(1.0, 1.5)


@pytest.mark.parametrize("build", [
    lambda: AbsoluteComparator(tol=-1.0),
    lambda: AbsoluteComparator(tol=nan),
    lambda: AbsoluteComparator(tol=inf),
    lambda: RelativeComparator(tol=-0.1),
    lambda: UlpComparator(tol=-1),
    lambda: UlpComparator(tol=1.5),
    lambda: FloatComparator(eps=-1e-3),
    lambda: FloatComparator().with_ulp(-2),
])
def test_misconfigured_comparators_are_rejected(build):
    with pytest.raises(ValueError):
        build()


def test_descriptions():
    assert ExactComparator().description() == "exact equality x == y."
    assert AbsoluteComparator(tol=1e-6).description() == "absolute difference, |x - y| <= 1e-06."
    assert RelativeComparator(tol=0.1).description() == "relative difference, |x - y| <= 0.1 * max(|x|, |y|)."
    assert UlpComparator(tol=4).description() == \
        "ULP difference less than or equal to 4. See documentation for details."
    assert FloatComparator(eps=1e-6, ulp=2).description().endswith("Epsilon:       1e-06\nULP tolerance: 2")
    # describe is stable
    comp = AbsoluteComparator(tol=0.25)
    assert comp.describe() == comp.describe() == comp.description()


def test_vectorized_predicates_match_elementwise():
    a = np.array([[0.0, 1.0, -2.0, inf], [nan, 3.0, 0.0, 1e-9]])
    b = np.array([[0.0, 1.05, 2.0, inf], [nan, 2.0, 1e-12, 0.0]])
    for comp in [ExactComparator(), ExactComparator(nan_equal=True), AbsoluteComparator(tol=0.1),
                 RelativeComparator(tol=0.1), RelativeComparator(tol=1.0, nan_equal=True)]:
        mask = comp.equal_array(a, b)
        expected = np.array([[comp.equal(x, y) for x, y in zip(ra, rb)] for ra, rb in zip(a, b)])
        assert np.array_equal(mask, expected), comp.description()
    assert UlpComparator(tol=1).equal_array(a, b) is None
    assert math.isclose(FloatComparator().eps, 4 * np.finfo(np.float64).eps)


@pytest.mark.parametrize("comparator", [AbsoluteComparator(tol=0), RelativeComparator(tol=0.5), ExactComparator()])
def test_boolean_elements(comparator):
    assert comparator.equal(True, True)
    assert comparator.equal(np.bool_(False), np.bool_(False))
    assert not comparator.equal(np.bool_(True), np.bool_(False))
    a = np.array([[True, False], [False, True]])
    b = np.array([[True, True], [False, False]])
    assert comparator.equal_array(a, a.copy()).all()
    assert comparator.equal_array(a, b).tolist() == [[True, False], [True, False]]


def test_boolean_matrices_are_compared_as_zero_and_one():
    a = np.array([[True, False]])
    assert compare_matrices(a, a.copy(), AbsoluteComparator(tol=0)) == Equal()
    outcome = compare_matrices(a, np.array([[False, False]]), AbsoluteComparator(tol=0))
    assert outcome.positions == [(0, 0)]
    assert outcome.mismatches[0].reason == "Absolute error: 1."
    assert compare_matrices(a, np.array([[False, False]]), AbsoluteComparator(tol=1)) == Equal()
