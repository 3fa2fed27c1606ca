from dataclasses import dataclass

from matrixcompare.comparators import ElementwiseComparator, ExactComparator


@dataclass(frozen=True)
class ScalarMismatch:
    x: object
    y: object
    comparator_description: str
    reason: str = ""

    def report(self) -> str:
        reason = f" {self.reason}" if self.reason else ""
        return (f"Scalars x and y do not compare equal.\n\n"
                f"x = {self.x}, y = {self.y}.{reason}\n\n"
                f"Comparison criterion: {self.comparator_description}")

    def __str__(self):
        return self.report()


def compare_scalars(x, y, comparator: ElementwiseComparator | None = None) -> ScalarMismatch | None:
    """
    Compare two scalars with the same comparators used for matrices.
    :return: None on a match, otherwise the mismatch
    """
    if comparator is None:
        comparator = ExactComparator()
    reason = comparator.compare(x, y)
    if reason is None:
        return None
    return ScalarMismatch(x=x, y=y, comparator_description=comparator.description(), reason=reason)
