"""
Comparators used for element-wise comparison of matrix entries and scalars.

A comparator decides whether two elements are equal and, if not, gives a short reason.
All comparators treat NaN as unequal to everything, including NaN, unless constructed
with nan_equal=True, in which case a NaN matches another NaN (but never a number).
"""
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

import numpy as np

from matrixcompare.ulp import ulp_diff, UlpResultKind

log_module = logging.getLogger(__name__)


def _is_nan(x) -> bool:
    return x != x


def _check_tolerance(tol, name: str):
    if isinstance(tol, bool) or not isinstance(tol, (int, float, np.integer, np.floating)):
        err = f"{name} tolerance must be a real number, got {type(tol)}."
        log_module.error(err)
        raise ValueError(err)
    if not math.isfinite(tol) or tol < 0:
        err = f"{name} tolerance must be finite and non-negative, got {tol}."
        log_module.error(err)
        raise ValueError(err)


def _as_number(x):
    # booleans have no subtraction in numpy, measure them as 0 / 1
    return int(x) if isinstance(x, (bool, np.bool_)) else x


def _as_number_array(a: np.ndarray) -> np.ndarray:
    return a.astype(np.int64) if a.dtype == np.bool_ else a


def _distance(a, b):
    if np.iscomplexobj(a) or np.iscomplexobj(b):
        return abs(a - b)
    # subtract the smaller from the larger number, keeps unsigned types from wrapping around
    return a - b if a > b else b - a


def _distance_array(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    if np.iscomplexobj(a) or np.iscomplexobj(b):
        return np.abs(a - b)
    return np.where(a > b, a - b, b - a)


class ElementwiseComparator(ABC):
    """
    Base for elementwise comparators.
    Subclasses implement _compare for the non-trivial case and description.
    """
    nan_equal: bool = False

    def compare(self, a, b) -> str | None:
        """
        Compares two elements.
        :return: None if the elements compare equal, else the reason of the failure (possibly empty).
        """
        if self.nan_equal and _is_nan(a) and _is_nan(b):
            return None
        return self._compare(a, b)

    def equal(self, a, b) -> bool:
        return self.compare(a, b) is None

    def equal_array(self, a: np.ndarray, b: np.ndarray) -> np.ndarray | None:
        """
        Vectorized version of equal for two arrays of the same shape.
        Comparators without a vectorized form return None.
        """
        mask = self._equal_array(a, b)
        if mask is not None and self.nan_equal:
            mask = mask | (np.isnan(a) & np.isnan(b))
        return mask

    def _equal_array(self, a: np.ndarray, b: np.ndarray) -> np.ndarray | None:
        return None

    @abstractmethod
    def _compare(self, a, b) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def _describe(self) -> str:
        raise NotImplementedError

    def description(self) -> str:
        """
        Stable description of the comparison criterion, used verbatim in reports.
        """
        s = self._describe()
        if self.nan_equal:
            s += " NaN compares equal to NaN."
        return s

    def describe(self) -> str:
        return self.description()


@dataclass(frozen=True)
class ExactComparator(ElementwiseComparator):
    """
    Exact equality x == y.
    """
    nan_equal: bool = False

    def _compare(self, a, b) -> str | None:
        return None if a == b else ""

    def _equal_array(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return np.asarray(a == b)

    def _describe(self) -> str:
        return "exact equality x == y."


@dataclass(frozen=True)
class AbsoluteComparator(ElementwiseComparator):
    """
    |x - y| <= tol. Works for integral types, signed and unsigned.
    """
    tol: float = 0.0
    nan_equal: bool = False

    def __post_init__(self):
        _check_tolerance(self.tol, "Absolute")

    def _compare(self, a, b) -> str | None:
        a, b = _as_number(a), _as_number(b)
        if a == b:
            return None
        distance = _distance(a, b)
        if distance <= self.tol:
            return None
        return f"Absolute error: {distance}."

    def _equal_array(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        a, b = _as_number_array(a), _as_number_array(b)
        with np.errstate(invalid="ignore", over="ignore"):
            return (a == b) | (_distance_array(a, b) <= self.tol)

    def _describe(self) -> str:
        return f"absolute difference, |x - y| <= {self.tol}."


@dataclass(frozen=True)
class RelativeComparator(ElementwiseComparator):
    """
    |x - y| <= tol * max(|x|, |y|).

    If both numbers are zero they compare equal. If exactly one is zero, the criterion
    degenerates to |x - y| <= tol * |non-zero number|, i.e. it only holds for tol >= 1.
    The criterion is symmetric in x and y.
    """
    tol: float = 0.0
    nan_equal: bool = False

    def __post_init__(self):
        _check_tolerance(self.tol, "Relative")

    def _compare(self, a, b) -> str | None:
        a, b = _as_number(a), _as_number(b)
        if a == b:
            return None
        distance = _distance(a, b)
        if not np.isfinite(distance):
            # infinities only match themselves, NaN matches nothing
            return "Non-finite difference."
        scale = max(abs(a), abs(b))
        if distance <= self.tol * scale:
            return None
        # scale is positive here, a == b would have caught two zeros
        return f"Relative error: {distance / scale}."

    def _equal_array(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        a, b = _as_number_array(a), _as_number_array(b)
        with np.errstate(invalid="ignore", over="ignore"):
            distance = _distance_array(a, b)
            scale = np.maximum(np.abs(a), np.abs(b))
            return (a == b) | (np.isfinite(distance) & (distance <= self.tol * scale))

    def _describe(self) -> str:
        return f"relative difference, |x - y| <= {self.tol} * max(|x|, |y|)."


@dataclass(frozen=True)
class UlpComparator(ElementwiseComparator):
    """
    Elementwise comparison of floating point numbers based on their ULP difference.
    Numbers of different sign (other than +0 / -0) never compare equal.
    """
    tol: int = 0
    nan_equal: bool = False

    def __post_init__(self):
        if isinstance(self.tol, bool) or not isinstance(self.tol, (int, np.integer)) or self.tol < 0:
            err = f"ULP tolerance must be a non-negative integer, got {self.tol}."
            log_module.error(err)
            raise ValueError(err)

    def _compare(self, a, b) -> str | None:
        result = ulp_diff(a, b)
        if result.kind == UlpResultKind.EXACT_MATCH:
            return None
        if result.kind == UlpResultKind.DIFFERENCE and result.difference <= self.tol:
            return None
        return str(result)

    def _describe(self) -> str:
        return f"ULP difference less than or equal to {self.tol}. See documentation for details."


@dataclass(frozen=True)
class FloatComparator(ElementwiseComparator):
    """
    Conservative default for floating point numbers: an absolute comparison with a tolerance close to
    machine epsilon, followed by an ULP based comparison if the former fails.
    """
    eps: float = 4 * float(np.finfo(np.float64).eps)
    ulp: int = 4
    nan_equal: bool = False

    def __post_init__(self):
        # validate through the building blocks
        self._abs()
        self._ulp()

    def _abs(self) -> AbsoluteComparator:
        return AbsoluteComparator(tol=self.eps)

    def _ulp(self) -> UlpComparator:
        return UlpComparator(tol=self.ulp)

    def with_eps(self, eps: float) -> "FloatComparator":
        return replace(self, eps=eps)

    def with_ulp(self, ulp: int) -> "FloatComparator":
        return replace(self, ulp=ulp)

    def _compare(self, a, b) -> str | None:
        if self._abs().compare(a, b) is None:
            return None
        return self._ulp().compare(a, b)

    def _describe(self) -> str:
        return (f"Epsilon-sized absolute comparison, followed by an ULP-based comparison.\n"
                f"Please see the documentation for details.\n"
                f"Epsilon:       {self.eps}\n"
                f"ULP tolerance: {self.ulp}")
