from .eca import (
    INPUT_PATTERNS,
    InvalidPatternError,
    RuleTable,
    build_rule_table,
    describe_rule,
    generate,
    lookup,
    step,
)
from .window import RowWindow, make_initial_row, simulate, take_rows

__all__ = [
    "INPUT_PATTERNS",
    "InvalidPatternError",
    "RuleTable",
    "build_rule_table",
    "describe_rule",
    "generate",
    "lookup",
    "step",
    "RowWindow",
    "make_initial_row",
    "simulate",
    "take_rows",
]
