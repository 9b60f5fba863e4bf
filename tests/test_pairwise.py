"""Tests for the all-pairs covering array engine."""
import pytest
from unittest.mock import patch

from casegen.bounds import compute_pairwise_lower_bound
from casegen.errors import EmptyDomainError, InternalInvariantError, InvalidSpaceError
from casegen.model import ParameterSpace
from casegen.pairwise import PairCoverage, all_pairs, build_covering_array
from casegen.verify import verify_pairwise_coverage


def test_three_binary_parameters_form_orthogonal_array():
    rows = all_pairs([["a1", "a2"], ["b1", "b2"], ["c1", "c2"]])
    assert rows == [
        ("a1", "b1", "c1"),
        ("a1", "b2", "c2"),
        ("a2", "b1", "c2"),
        ("a2", "b2", "c1"),
    ]


def test_vertical_growth_appends_rows_for_leftover_pairs():
    # After horizontal growth of the fourth column, (B=1, D=0) and (B=0, D=1)
    # are still missing; each needs its own new row.
    assert build_covering_array([2, 2, 2, 2]) == [
        [0, 0, 0, 0],
        [0, 1, 1, 1],
        [1, 0, 1, 0],
        [1, 1, 0, 1],
        [0, 1, 0, 0],
        [0, 0, 0, 1],
    ]


def test_two_parameters_are_seeded_with_their_cross_product():
    rows = all_pairs([["x", "y", "z"], [1, 2]])
    assert rows == [("x", 1), ("x", 2), ("y", 1), ("y", 2), ("z", 1), ("z", 2)]


def test_columns_are_projected_back_to_declared_order():
    # The larger domain is placed first internally, so it varies slowest in
    # generation order while still being reported in its declared column.
    rows = all_pairs([[1, 2], ["x", "y", "z"]])
    assert rows == [(1, "x"), (2, "x"), (1, "y"), (2, "y"), (1, "z"), (2, "z")]


def test_singleton_column_is_reprojected():
    rows = all_pairs([["only"], [1, 2, 3]])
    assert rows == [("only", 1), ("only", 2), ("only", 3)]


def test_worked_example_checkout_domains():
    users = ["guest", "member"]
    products = ["book", "laptop", "headphones", "gift card"]
    payments = ["card", "paypal", "invoice"]
    coupons = [None, "WELCOME10", "FREESHIP", "HALFOFF"]
    space = ParameterSpace.from_domains(
        [users, products, payments, coupons],
        names=["user", "product", "payment", "coupon"],
    )

    rows = all_pairs(space)

    passed, missing = verify_pairwise_coverage(space, rows)
    assert passed, missing
    assert compute_pairwise_lower_bound(space.get_counts()) == 16
    assert len(rows) == 16
    for row in rows:
        assert row[0] in users
        assert row[1] in products
        assert row[2] in payments
        assert row[3] in coupons
    # "no coupon" is an ordinary value and must be paired like any other
    assert any(r[3] is None and r[2] == "invoice" for r in rows)


def test_single_parameter_lists_each_value():
    assert all_pairs([["only"]]) == [("only",)]
    assert all_pairs([[1, 2, 3]]) == [(1,), (2,), (3,)]


def test_unhashable_values_are_supported():
    users = [{"id": 1}, {"id": 2}]
    carts = [[1], [1, 2], []]
    flags = [None, False]
    rows = all_pairs([users, carts, flags])
    passed, missing = verify_pairwise_coverage([users, carts, flags], rows)
    assert passed, missing
    assert len(rows) >= 6


def test_larger_space_is_covered_and_near_bound():
    domains = [list(range(n)) for n in (3, 3, 3, 3, 3, 3, 3)]
    rows = all_pairs(domains)
    passed, missing = verify_pairwise_coverage(domains, rows)
    assert passed, missing
    assert 9 <= len(rows) < 3 ** 7


def test_determinism():
    domains = [list("ab"), list("cdef"), list("ghi"), list("jklm"), list("no")]
    assert all_pairs(domains) == all_pairs(domains)


def test_input_is_not_mutated():
    domains = [["a", "b"], ["c", "d", "e"], ["f"]]
    snapshot = [list(d) for d in domains]
    all_pairs(domains)
    assert domains == snapshot


def test_empty_space_raises():
    with pytest.raises(InvalidSpaceError):
        all_pairs([])


def test_empty_domain_raises():
    with pytest.raises(EmptyDomainError) as exc:
        all_pairs([["a"], []])
    assert exc.value.index == 1


def test_pair_coverage_bookkeeping():
    coverage = PairCoverage([2, 3])
    coverage.add_column(1)
    assert coverage.remaining == 6
    assert coverage.gain([0], 1, 2) == 1
    assert coverage.cover_row([0, 2], 1) == 1
    assert coverage.cover_row([0, 2], 1) == 0
    assert coverage.remaining == 5
    assert coverage.gain([0], 1, 2) == 0
    assert coverage.uncovered_for(1)[0] == (0, 0, 0)


def test_loop_invariant_violation_is_surfaced():
    with patch("casegen.pairwise._grow_vertically", return_value=0):
        with pytest.raises(InternalInvariantError, match="still uncovered"):
            build_covering_array([2, 2, 2, 2])


def test_final_coverage_check_reports_missing_pairs():
    with patch("casegen.pairwise.find_missing_pairs", return_value=[(0, 1, 0, 1)]):
        with pytest.raises(InternalInvariantError) as exc:
            all_pairs(ParameterSpace.from_domains([["a1", "a2"], ["b1", "b2"]], names=["A", "B"]))
    assert exc.value.missing_pairs == ["(A: a1, B: b2)"]
