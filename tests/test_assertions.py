import numpy as np
import pytest
import scipy.sparse as sp

from matrixcompare import (
    assert_matrix_eq, assert_scalar_eq, make_comparator, mock_matrix,
    ExactComparator, AbsoluteComparator, RelativeComparator, UlpComparator, FloatComparator
)


def test_make_comparator():
    assert make_comparator() == ExactComparator()
    assert make_comparator("abs", tol=1e-3) == AbsoluteComparator(tol=1e-3)
    assert make_comparator("rel", tol=0.1) == RelativeComparator(tol=0.1)
    assert make_comparator("ulp", tol=8) == UlpComparator(tol=8)
    assert make_comparator("float") == FloatComparator()
    assert make_comparator("float", eps=1e-6, ulp=12) == FloatComparator(eps=1e-6, ulp=12)
    assert make_comparator("exact", nan_equal=True) == ExactComparator(nan_equal=True)


@pytest.mark.parametrize("kwargs", [
    {"comp": "approx"},
    {"comp": "abs"},
    {"comp": "ulp"},
    {"comp": "exact", "tol": 1.0},
    {"comp": "abs", "tol": 1.0, "eps": 1.0},
    {"comp": "rel", "tol": 0.1, "ulp": 3},
    {"comp": "float", "tol": 1.0},
    {"comp": "abs", "tol": -1.0},
])
def test_make_comparator_rejects_invalid_options(kwargs):
    with pytest.raises(ValueError):
        make_comparator(**kwargs)


def test_matrix_eq_passes():
    x = mock_matrix([[1.0, 2.0], [3.0, 4.0]])
    assert_matrix_eq(x, x)
    assert_matrix_eq(x, x, comp="exact")
    assert_matrix_eq(x, x, comp="float")
    assert_matrix_eq(x, x, comp="abs", tol=1e-12)
    assert_matrix_eq(x, x, comp="rel", tol=1e-12)
    assert_matrix_eq(x, x, comp="ulp", tol=0)
    assert_matrix_eq(x, x, comp="float", eps=0.0, ulp=0)
    assert_matrix_eq(np.array([[1.0, 0.0], [0.0, 2.0]]), sp.diags([1.0, 2.0]))


def test_matrix_eq_fails_with_report():
    a = mock_matrix([[1.00, 2.00], [3.00, 4.00]])
    b = mock_matrix([[1.01, 2.00], [3.40, 4.00]])
    with pytest.raises(AssertionError) as e:
        assert_matrix_eq(a, b, comp="abs", tol=1e-8)
    message = str(e.value)
    assert "have 2 mismatched element pairs" in message
    assert "(0, 0): x = 1.0, y = 1.01." in message
    assert "(1, 0): x = 3.0, y = 3.4." in message
    assert "Comparison criterion: absolute difference, |x - y| <= 1e-08." in message


def test_matrix_eq_fails_on_dimensions():
    with pytest.raises(AssertionError, match="do not match"):
        assert_matrix_eq(np.zeros((2, 1)), np.zeros((1, 2)))


def test_matrix_eq_accepts_comparator_instance():
    a = np.array([[1.0, 1e-9]])
    b = np.array([[1.0, 0.0]])
    assert_matrix_eq(a, b, comp=AbsoluteComparator(tol=1e-8))
    with pytest.raises(AssertionError):
        assert_matrix_eq(a, b, comp=ExactComparator())


def test_scalar_eq():
    assert_scalar_eq(2, 2)
    assert_scalar_eq(2.0, 2.0, comp="exact")
    assert_scalar_eq(2, 3, comp="abs", tol=1)
    assert_scalar_eq(2.0, 2.0, comp="ulp", tol=1)
    assert_scalar_eq(2.0, 2.0, comp="float", eps=1e-6, ulp=12)
    assert_scalar_eq(0.0, 0.0, comp="rel", tol=0.1)


@pytest.mark.parametrize("x, y, kwargs", [
    (3, 4, {}),
    (3, 4, {"comp": "exact"}),
    (3.0, 4.0, {"comp": "abs", "tol": 1e-8}),
    (3.0, 4.0, {"comp": "ulp", "tol": 4}),
    (3.0, 4.0, {"comp": "float"}),
    (0.0, 1.0, {"comp": "rel", "tol": 0.5}),
])
def test_scalar_eq_mismatch(x, y, kwargs):
    with pytest.raises(AssertionError, match="Scalars x and y do not compare equal."):
        assert_scalar_eq(x, y, **kwargs)
