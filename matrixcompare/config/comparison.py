import logging
from dataclasses import dataclass
from typing import Optional

from simple_parsing import field

from matrixcompare.config.basic import BaseClass
from matrixcompare.comparators import ElementwiseComparator
from matrixcompare.assertions import make_comparator
from matrixcompare.outcome import MAX_MISMATCH_REPORTS

log_module = logging.getLogger(__name__)


@dataclass
class ComparisonSettings(BaseClass):
    left_file: str = field(
        alias="-l", default="",
        help="Matrix file X (left): .npy (dense), .npz (scipy sparse) or .pt (torch tensor)."
    )
    right_file: str = field(
        alias="-r", default="",
        help="Matrix file Y (right): .npy (dense), .npz (scipy sparse) or .pt (torch tensor)."
    )
    comparator: str = field(
        alias="-comp", default="exact",
        help="Elementwise comparator: exact, abs, rel, ulp or float."
    )
    tol: Optional[float] = field(
        default=None,
        help="Tolerance for the abs, rel (float) and ulp (integer) comparators."
    )
    eps: Optional[float] = field(
        default=None,
        help="Absolute tolerance of the float comparator, defaults to 4 times machine epsilon."
    )
    ulp: Optional[int] = field(
        default=None,
        help="ULP tolerance of the float comparator, defaults to 4."
    )
    nan_equal: bool = field(
        default=False,
        help="Treat NaN as equal to NaN."
    )
    max_reports: int = field(
        alias="-m", default=MAX_MISMATCH_REPORTS,
        help="Maximum number of mismatched elements listed in the report."
    )

    def to_comparator(self) -> ElementwiseComparator:
        tol = self.tol
        if self.comparator == "ulp" and tol is not None:
            if not float(tol).is_integer():
                err = f"ULP tolerance must be an integer, got {tol}."
                log_module.error(err)
                raise ValueError(err)
            tol = int(tol)
        return make_comparator(
            comp=self.comparator, tol=tol, eps=self.eps, ulp=self.ulp, nan_equal=self.nan_equal
        )
