from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Iterator, Optional, Tuple

import numpy as np

Pattern = Tuple[int, int, int]


class InvalidPatternError(LookupError):
    """A neighborhood that is not one of the 8 binary (left, self, right) triads."""


def int_to_bits(number: int, width: int) -> Tuple[int, ...]:
    """Binary digits of `number`, most significant first, left-padded with 0s to `width`.

    Numbers wider than `width` keep all of their digits.
    """
    if number < 0:
        raise ValueError("number must be non-negative")
    digits = [int(c) for c in format(int(number), "b")]
    shortage = width - len(digits)
    if shortage > 0:
        digits = [0] * shortage + digits
    return tuple(digits)


# (0,0,0), (0,0,1), ..., (1,1,1): counting 0..7 in binary
INPUT_PATTERNS: Tuple[Pattern, ...] = tuple(int_to_bits(i, 3) for i in range(8))


def _pattern_index(pattern) -> Optional[int]:
    try:
        cells = tuple(pattern)
    except TypeError:
        return None
    if len(cells) != 3:
        return None
    if not all(isinstance(c, (numbers.Integral, np.bool_)) and c in (0, 1) for c in cells):
        return None
    l, c, r = (int(v) for v in cells)
    return (l << 2) | (c << 1) | r


def _check_rule_number(rule_number) -> int:
    if isinstance(rule_number, (bool, np.bool_)) or not isinstance(rule_number, numbers.Integral):
        raise ValueError(f"rule_number must be an integer, got {rule_number!r}")
    if not (0 <= rule_number <= 255):
        raise ValueError("rule_number must be in [0,255]")
    return int(rule_number)


class RuleTable(Mapping):
    """Read-only mapping from each (left, self, right) pattern to the next cell state.

    `bits[i]` holds the state for pattern i = (l<<2)|(c<<1)|r and is what `step`
    indexes with; the mapping view is the same data keyed by tuples.
    """

    def __init__(self, rule_number: int):
        self._rule_number = _check_rule_number(rule_number)
        # bit i of the rule number is the state for INPUT_PATTERNS[i]
        states = reversed(int_to_bits(self._rule_number, 8))
        bits = np.array(list(states), dtype=np.uint8)
        bits.setflags(write=False)
        self._bits = bits

    @property
    def rule_number(self) -> int:
        return self._rule_number

    @property
    def bits(self) -> np.ndarray:
        return self._bits

    def __getitem__(self, pattern) -> int:
        return lookup(self, pattern)

    def __contains__(self, pattern) -> bool:
        return _pattern_index(pattern) is not None

    def __iter__(self) -> Iterator[Pattern]:
        return iter(INPUT_PATTERNS)

    def __len__(self) -> int:
        return len(INPUT_PATTERNS)

    def __hash__(self) -> int:
        return hash(self._bits.tobytes())

    def __repr__(self) -> str:
        return f"RuleTable(rule_number={self._rule_number})"


def build_rule_table(rule_number: int) -> RuleTable:
    """Return the transition table for an elementary rule number (Wolfram numbering).

    The rule's binary digits, zero-padded to 8 and reversed, are paired in order with
    INPUT_PATTERNS, so pattern 000 takes the least significant bit and 111 the most
    significant one. Rule 110 = 01101110 therefore maps 110 -> 1 and 111 -> 0.
    """
    return RuleTable(rule_number)


def lookup(table: RuleTable, pattern) -> int:
    """Next state for a 3-cell neighborhood; anything but a binary triad is an error."""
    idx = _pattern_index(pattern)
    if idx is None:
        raise InvalidPatternError(f"not an elementary neighborhood: {pattern!r}")
    return int(table.bits[idx])


def describe_rule(table: RuleTable) -> str:
    """One `l c r -> s` line per pattern, 111 first."""
    lines = []
    for pattern in reversed(INPUT_PATTERNS):
        lines.append(" ".join(map(str, pattern)) + " -> " + str(table[pattern]))
    return "\n".join(lines)


def _as_row(row) -> np.ndarray:
    x = np.asarray(row)
    if x.ndim != 1:
        raise ValueError("row must be 1D")
    bad = np.flatnonzero((x != 0) & (x != 1))
    if bad.size:
        i = int(bad[0])
        raise InvalidPatternError(
            f"cell {i} holds {x[i]!r}; rows may only contain 0 and 1"
        )
    return x.astype(np.uint8)


def step(table: RuleTable, row, wrap: bool = False) -> np.ndarray:
    """One generation of an elementary automaton.

    Args:
        table: transition table from `build_rule_table`.
        row: 1D sequence of cells in {0,1}; may be empty.
        wrap: toroidal neighbours if True; otherwise cells past either edge are 0.

    Returns:
        Next row (uint8) with the same length as `row`.
    """
    x = _as_row(row)
    if wrap:
        left = np.roll(x, 1)
        right = np.roll(x, -1)
    else:
        padded = np.pad(x, 1, mode="constant")
        left = padded[:-2]
        right = padded[2:]
    idx = (left << 2) | (x << 1) | right
    return table.bits[idx]


def _simulation(table: RuleTable, row: np.ndarray, wrap: bool) -> Iterator[np.ndarray]:
    while True:
        row = step(table, row, wrap=wrap)
        yield row


def generate(table: RuleTable, initial_row, wrap: bool = False) -> Iterator[np.ndarray]:
    """Endless stream of the generations that follow `initial_row`.

    The first row yielded is step(table, initial_row); the initial row itself is not
    repeated. Rows are computed only as they are pulled. The initial row is checked
    here, before the first pull.
    """
    return _simulation(table, _as_row(initial_row), wrap)
