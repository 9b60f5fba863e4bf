"""Tests for coverage verification logic."""
import pytest

from casegen.model import ParameterSpace
from casegen.verify import find_missing_pairs, index_of, verify_all_values, verify_pairwise_coverage


def build_space(*domains):
    return ParameterSpace.from_domains(list(domains), names=[chr(ord("A") + i) for i in range(len(domains))])


def test_verify_success():
    space = build_space(["A1", "A2"], ["B1", "B2"], ["C1", "C2"])

    # an orthogonal array of strength 2 for 2^3
    rows = [
        ["A1", "B1", "C1"],
        ["A1", "B2", "C2"],
        ["A2", "B1", "C2"],
        ["A2", "B2", "C1"]
    ]

    passed, missing = verify_pairwise_coverage(space, rows)
    assert passed is True
    assert len(missing) == 0

def test_verify_fail():
    space = build_space(["A1", "A2"], ["B1", "B2"])

    rows = [
        ["A1", "B1"],
        ["A2", "B1"]
    ]

    passed, missing = verify_pairwise_coverage(space, rows)
    assert passed is False
    assert len(missing) == 2
    assert "(A: A1, B: B2)" in missing
    assert "(A: A2, B: B2)" in missing

def test_verify_rejects_value_outside_domain():
    space = build_space(["A1", "A2"], ["B1", "B2"])
    with pytest.raises(ValueError, match="row 1, col 2"):
        verify_pairwise_coverage(space, [["A1", "B9"]])

def test_missing_pairs_are_capped():
    space = build_space(list(range(10)), list(range(10)))
    passed, missing = verify_pairwise_coverage(space, [])
    assert passed is False
    assert len(missing) == 20

def test_find_missing_pairs_order():
    assert find_missing_pairs([2, 2], [[0, 0], [1, 1]]) == [(0, 1, 0, 1), (0, 1, 1, 0)]

def test_index_of_uses_equality_without_hashing():
    values = [None, {"id": 1}, [1, 2]]
    assert index_of(values, None) == 0
    assert index_of(values, {"id": 1}) == 1
    assert index_of(values, [1, 2]) == 2
    assert index_of(values, "nope") == -1

def test_verify_all_values():
    space = build_space(["A1", "A2"], ["B1"])
    assert verify_all_values(space, [["A1", "B1"], ["A2", "B1"]]) == (True, [])
    assert verify_all_values(space, [["A1", "B1"]]) == (False, ["(A: A2)"])

def test_verify_single_parameter_requires_every_value():
    space = build_space(["A1", "A2"])
    assert verify_pairwise_coverage(space, [["A1"], ["A2"]]) == (True, [])
    assert verify_pairwise_coverage(space, []) == (False, ["(A: A1)", "(A: A2)"])
    with pytest.raises(ValueError, match="row 1, col 1"):
        verify_pairwise_coverage(space, [["A9"]])
