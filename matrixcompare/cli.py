"""
Command line comparison of two matrix files.

    matrixcompare -l x.npy -r y.npz --comparator abs --tol 1e-8

Exit code 0 if the matrices compare equal, 1 on a mismatch, 2 on invalid input.
"""
import logging

from matrixcompare.config import ComparisonSettings, setup_program_logging, setup_parser
from matrixcompare.comparison import compare_matrices
from matrixcompare.data_io import load_matrix

log_module = logging.getLogger(__name__)


def compare_files(settings: ComparisonSettings) -> bool:
    comparator = settings.to_comparator()
    left = load_matrix(settings.left_file)
    right = load_matrix(settings.right_file)
    outcome = compare_matrices(left, right, comparator)
    if outcome.is_equal:
        log_module.info(outcome.report())
    else:
        log_module.warning(outcome.report(max_reports=settings.max_reports))
    return outcome.is_equal


def main(args: list[str] | None = None) -> int:
    # setup parser
    parser, parsed = setup_parser(
        prog_name="matrixcompare", dict_config_dataclasses={"settings": ComparisonSettings}, args=args
    )
    settings = ComparisonSettings.from_cli(args=parsed.settings)
    # setup logging
    setup_program_logging(name="Matrix Comparison", level=logging.DEBUG if settings.debug else logging.INFO)
    settings.display()

    if not settings.left_file or not settings.right_file:
        parser.print_usage()
        log_module.error("Provide both a left (-l) and a right (-r) matrix file.")
        return 2
    try:
        equal = compare_files(settings)
    except (FileNotFoundError, AttributeError, ValueError, TypeError) as e:
        parser.print_usage()
        log_module.exception(e)
        return 2
    return 0 if equal else 1


if __name__ == '__main__':
    raise SystemExit(main())
