"""
Outcome of a matrix comparison and its rendering into human-readable reports.
"""
from dataclasses import dataclass

MAX_MISMATCH_REPORTS = 12


def _same_value(a, b) -> bool:
    # NaN payloads are reported as they are, two NaN entries describe the same mismatch
    if a is b:
        return True
    return bool(a == b) or bool(a != a and b != b)


@dataclass(frozen=True, eq=False)
class Mismatch:
    row: int
    col: int
    left: object
    right: object
    # short reason given by the comparator, may be empty, not part of equality
    reason: str = ""

    def __eq__(self, other):
        if not isinstance(other, Mismatch):
            return NotImplemented
        return (self.row, self.col) == (other.row, other.col) and \
            _same_value(self.left, other.left) and _same_value(self.right, other.right)

    def __hash__(self):
        return hash((self.row, self.col))

    def reverse(self) -> "Mismatch":
        return Mismatch(row=self.row, col=self.col, left=self.right, right=self.left, reason=self.reason)

    def __str__(self):
        reason = f" {self.reason}" if self.reason else ""
        return f"({self.row}, {self.col}): x = {self.left}, y = {self.right}.{reason}"


class ComparisonOutcome:
    """
    Result of comparing two matrices X (left) and Y (right).
    One of Equal, DimensionMismatch or ValueMismatches.
    """
    @property
    def is_equal(self) -> bool:
        return False

    def reverse(self) -> "ComparisonOutcome":
        """ Interchange the roles of X and Y. """
        return self

    def report(self, max_reports: int = MAX_MISMATCH_REPORTS) -> str:
        raise NotImplementedError

    def __bool__(self):
        return self.is_equal

    def __str__(self):
        return self.report()


@dataclass(frozen=True)
class Equal(ComparisonOutcome):
    @property
    def is_equal(self) -> bool:
        return True

    def report(self, max_reports: int = MAX_MISMATCH_REPORTS) -> str:
        return "Matrices X (left) and Y (right) compare equal."


@dataclass(frozen=True)
class DimensionMismatch(ComparisonOutcome):
    left_shape: tuple[int, int]
    right_shape: tuple[int, int]

    def reverse(self) -> "DimensionMismatch":
        return DimensionMismatch(left_shape=self.right_shape, right_shape=self.left_shape)

    def report(self, max_reports: int = MAX_MISMATCH_REPORTS) -> str:
        return (f"Dimensions of matrices X (left) and Y (right) do not match.\n"
                f" dim(X) = {self.left_shape[0]} x {self.left_shape[1]}\n"
                f" dim(Y) = {self.right_shape[0]} x {self.right_shape[1]}")


@dataclass(frozen=True)
class ValueMismatches(ComparisonOutcome):
    comparator_description: str
    # sorted by (row, col), each position at most once
    mismatches: tuple[Mismatch, ...]

    def reverse(self) -> "ValueMismatches":
        return ValueMismatches(
            comparator_description=self.comparator_description,
            mismatches=tuple(m.reverse() for m in self.mismatches)
        )

    @property
    def positions(self) -> list[tuple[int, int]]:
        return [(m.row, m.col) for m in self.mismatches]

    def report(self, max_reports: int = MAX_MISMATCH_REPORTS) -> str:
        num = len(self.mismatches)
        lines = [
            f"Matrices X (left) and Y (right) have {num} mismatched element pairs.",
            "The mismatched elements are listed below, in the format",
            "(row, col): x = X[[row, col]], y = Y[[row, col]].",
            "",
        ]
        lines.extend(f" {m}" for m in self.mismatches[:max_reports])
        if num > max_reports:
            lines.append(f" ... ({num - max_reports} mismatching elements not shown)")
        lines.append("")
        lines.append(f"Comparison criterion: {self.comparator_description}")
        return "\n".join(lines)
