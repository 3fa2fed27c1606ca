"""
Distance of two floating point numbers in units in the last place (ULP).

Follows the integer reinterpretation approach described in
"Comparing Floating Point Numbers, 2012 Edition" (B. Dawson):
for two finite floats of the same sign, the difference of their bit patterns
interpreted as integers counts the representable numbers between them.
"""
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np


class UlpResultKind(Enum):
    EXACT_MATCH = auto()
    DIFFERENCE = auto()
    INCOMPATIBLE_SIGNS = auto()
    INFINITY = auto()
    NAN = auto()


@dataclass(frozen=True)
class UlpComparisonResult:
    kind: UlpResultKind
    # only set for kind DIFFERENCE
    difference: int | None = None

    def __str__(self):
        match self.kind:
            case UlpResultKind.DIFFERENCE:
                return f"Difference: {self.difference} ULP."
            case UlpResultKind.INCOMPATIBLE_SIGNS:
                return "Numbers have incompatible signs."
            case UlpResultKind.INFINITY:
                return "Infinite value mismatch."
            case _:
                return ""


EXACT_MATCH = UlpComparisonResult(UlpResultKind.EXACT_MATCH)


def _as_float_pair(a, b) -> tuple[np.floating, np.floating]:
    if isinstance(a, np.float32) and isinstance(b, np.float32):
        return a, b
    return np.float64(a), np.float64(b)


def ulp_diff(a, b) -> UlpComparisonResult:
    """
    Compute the ULP distance between a and b.

    float32 pairs are measured in single precision, everything else is promoted to float64.
    +0 and -0 are an exact match. Infinities only match the same infinity.
    NaN never matches, not even another NaN.
    """
    a, b = _as_float_pair(a, b)
    if np.isnan(a) or np.isnan(b):
        return UlpComparisonResult(UlpResultKind.NAN)
    if a == b:
        return EXACT_MATCH
    if np.isinf(a) or np.isinf(b):
        return UlpComparisonResult(UlpResultKind.INFINITY)
    if np.signbit(a) != np.signbit(b):
        return UlpComparisonResult(UlpResultKind.INCOMPATIBLE_SIGNS)
    int_type = np.int32 if a.dtype == np.float32 else np.int64
    a_bits = int(a.view(int_type))
    b_bits = int(b.view(int_type))
    return UlpComparisonResult(UlpResultKind.DIFFERENCE, abs(a_bits - b_bits))


def next_float(x, steps: int = 1):
    """
    Return the float that is `steps` ULP away from x in the direction of +inf (for positive x).
    Mostly a helper to construct test inputs.
    """
    x = np.float32(x) if isinstance(x, np.float32) else np.float64(x)
    int_type = np.int32 if x.dtype == np.float32 else np.int64
    bits = x.view(int_type) + int_type(steps)
    return bits.view(x.dtype)
