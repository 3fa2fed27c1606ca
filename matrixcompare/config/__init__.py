from .basic import BaseClass, setup_program_logging, setup_parser
from .comparison import ComparisonSettings

__all__ = ["BaseClass", "setup_program_logging", "setup_parser", "ComparisonSettings"]
