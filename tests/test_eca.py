from itertools import islice

import numpy as np
import pytest

import automata.eca as eca
from automata.eca import (
    INPUT_PATTERNS,
    InvalidPatternError,
    RuleTable,
    build_rule_table,
    describe_rule,
    generate,
    int_to_bits,
    lookup,
    step,
)


def test_input_patterns_order():
    assert INPUT_PATTERNS[0] == (0, 0, 0)
    assert INPUT_PATTERNS[6] == (1, 1, 0)
    assert INPUT_PATTERNS[7] == (1, 1, 1)
    assert len(set(INPUT_PATTERNS)) == 8


def test_int_to_bits_pads_without_truncating():
    assert int_to_bits(5, 3) == (1, 0, 1)
    assert int_to_bits(1, 8) == (0, 0, 0, 0, 0, 0, 0, 1)
    assert int_to_bits(9, 3) == (1, 0, 0, 1)


def test_every_rule_is_total_and_round_trips():
    for n in range(256):
        tbl = build_rule_table(n)
        assert set(tbl) == set(INPUT_PATTERNS)
        assert len(tbl) == 8
        assert all(tbl[p] in (0, 1) for p in INPUT_PATTERNS)
        # Pattern i carries bit i of the rule number
        assert sum(tbl[p] << i for i, p in enumerate(INPUT_PATTERNS)) == n


def test_build_is_idempotent():
    assert build_rule_table(22) == build_rule_table(22)
    assert dict(build_rule_table(110)) == dict(build_rule_table(110))
    assert build_rule_table(30) != build_rule_table(110)


def test_rule_110_table():
    # 110 = 01101110, read from 111 down to 000
    tbl = build_rule_table(110)
    assert tbl[(1, 1, 1)] == 0
    assert tbl[(1, 1, 0)] == 1
    assert tbl[(1, 0, 0)] == 0
    assert tbl[(0, 1, 1)] == 1
    assert tbl[(0, 0, 0)] == 0


def test_rule_30_table():
    tbl = build_rule_table(30)
    assert tbl[(1, 1, 1)] == 0
    assert tbl[(1, 1, 0)] == 0
    assert tbl[(1, 0, 1)] == 0
    assert tbl[(1, 0, 0)] == 1
    assert tbl.bits.tolist() == [0, 1, 1, 1, 1, 0, 0, 0]


def test_rules_0_and_255():
    assert set(build_rule_table(0).values()) == {0}
    assert set(build_rule_table(255).values()) == {1}


@pytest.mark.parametrize("bad", [-1, 256, 1000, 1.5, "110", None, True])
def test_invalid_rule_number(bad):
    with pytest.raises(ValueError):
        build_rule_table(bad)


def test_numpy_rule_number_accepted():
    assert build_rule_table(np.uint8(30)) == build_rule_table(30)
    assert build_rule_table(np.int64(30)).rule_number == 30


@pytest.mark.parametrize("pattern", [(2, 0, 0), (1, 0), (1, 0, 1, 0), "101", None, (0.5, 0, 1)])
def test_lookup_rejects_malformed_patterns(pattern):
    tbl = build_rule_table(110)
    with pytest.raises(InvalidPatternError):
        lookup(tbl, pattern)
    assert pattern not in tbl


def test_lookup_accepts_arrays():
    tbl = build_rule_table(110)
    assert lookup(tbl, np.array([1, 1, 0], dtype=np.uint8)) == 1
    assert lookup(tbl, [0, 1, 1]) == 1


def test_lookup_accepts_bool_cells_like_step():
    tbl = build_rule_table(110)
    cells = np.array([True, True, False])
    assert lookup(tbl, cells) == 1
    assert lookup(tbl, (True, True, False)) == 1
    assert step(tbl, cells).tolist() == [1, 1, 0]


def test_rule_table_is_derived_from_its_number():
    tbl = RuleTable(30)
    assert tbl == build_rule_table(30)
    assert tbl.rule_number == 30
    assert tbl.bits.tolist() == build_rule_table(30).bits.tolist()
    # a table cannot be paired with another rule's mapping
    with pytest.raises(TypeError):
        RuleTable(30, build_rule_table(110))
    with pytest.raises(ValueError):
        RuleTable(256)


def test_table_is_read_only():
    tbl = build_rule_table(90)
    with pytest.raises(ValueError):
        tbl.bits[0] = 1
    with pytest.raises(AttributeError):
        tbl.rule_number = 91


def test_describe_rule():
    lines = describe_rule(build_rule_table(110)).splitlines()
    assert len(lines) == 8
    assert lines[0] == "1 1 1 -> 0"
    assert lines[-1] == "0 0 0 -> 0"


def test_step_preserves_length():
    rng = np.random.default_rng(0)
    tbl = build_rule_table(110)
    for w in range(10):
        x = rng.integers(0, 2, size=(w,), dtype=np.uint8)
        assert step(tbl, x).shape == (w,)
        assert step(tbl, x, wrap=True).shape == (w,)


def test_absorbing_rules():
    rng = np.random.default_rng(1)
    zero = build_rule_table(0)
    one = build_rule_table(255)
    for w in [0, 1, 7, 32]:
        x = rng.integers(0, 2, size=(w,), dtype=np.uint8)
        assert not step(zero, x).any()
        assert step(one, x).sum() == w


def test_single_cell_sees_dead_neighbours():
    for n in [1, 18, 30, 90, 110, 150]:
        tbl = build_rule_table(n)
        assert step(tbl, [1]).tolist() == [lookup(tbl, (0, 1, 0))]
        assert step(tbl, [0]).tolist() == [lookup(tbl, (0, 0, 0))]


def test_rule_30_from_single_cell():
    tbl = build_rule_table(30)
    assert step(tbl, [0, 0, 1, 0, 0]).tolist() == [0, 1, 1, 1, 0]


def test_fixed_and_wrapped_edges_differ():
    # Rule 90: next = left XOR right
    tbl = build_rule_table(90)
    x = np.array([1, 0, 0, 0], dtype=np.uint8)
    assert step(tbl, x).tolist() == [0, 1, 0, 0]
    assert step(tbl, x, wrap=True).tolist() == [0, 1, 0, 1]


def test_step_rejects_bad_rows():
    tbl = build_rule_table(110)
    with pytest.raises(InvalidPatternError, match=r"cell 1 holds"):
        step(tbl, [0, 2, 1])
    with pytest.raises(ValueError):
        step(tbl, np.zeros((2, 2), dtype=np.uint8))


def test_step_does_not_modify_input():
    tbl = build_rule_table(110)
    x = np.array([0, 1, 1, 0, 1], dtype=np.uint8)
    before = x.copy()
    step(tbl, x)
    assert np.array_equal(x, before)


def test_generate_starts_after_initial_row():
    tbl = build_rule_table(30)
    x0 = np.array([0, 0, 1, 0, 0], dtype=np.uint8)
    rows = generate(tbl, x0)
    first = next(rows)
    second = next(rows)
    assert np.array_equal(first, step(tbl, x0))
    assert np.array_equal(second, step(tbl, first))


def test_generate_is_lazy(monkeypatch):
    calls = []
    real_step = eca.step

    def counting_step(table, row, wrap=False):
        calls.append(1)
        return real_step(table, row, wrap=wrap)

    monkeypatch.setattr(eca, "step", counting_step)
    rows = generate(build_rule_table(110), [0, 1, 1, 0, 1, 0, 0, 1])
    assert len(calls) == 0
    taken = list(islice(rows, 5))
    assert len(taken) == 5
    assert len(calls) == 5


def test_generate_long_prefix_and_abandon():
    rows = generate(build_rule_table(110), np.ones(16, dtype=np.uint8))
    last = None
    for last in islice(rows, 2000):
        pass
    assert last.shape == (16,)
    rows.close()


def test_generate_is_deterministic():
    tbl = build_rule_table(110)
    x0 = np.random.default_rng(3).integers(0, 2, size=(24,), dtype=np.uint8)
    a = list(islice(generate(tbl, x0), 30))
    b = list(islice(generate(tbl, x0), 30))
    assert all(np.array_equal(r1, r2) for r1, r2 in zip(a, b))


def test_generate_uses_given_rule():
    x0 = np.array([0, 0, 0, 1, 0, 0, 0], dtype=np.uint8)
    r30 = list(islice(generate(build_rule_table(30), x0), 3))
    r110 = list(islice(generate(build_rule_table(110), x0), 3))
    assert r30[0].tolist() == [0, 0, 1, 1, 1, 0, 0]
    assert r110[0].tolist() == [0, 0, 1, 1, 0, 0, 0]


def test_generate_empty_row():
    rows = list(islice(generate(build_rule_table(1), []), 3))
    assert [r.shape for r in rows] == [(0,), (0,), (0,)]


def test_generate_validates_eagerly():
    with pytest.raises(InvalidPatternError):
        generate(build_rule_table(110), [0, 3, 1])
