"""All-pairs strategy: in-parameter-order covering array construction.

Parameters are placed one at a time, largest domain first. The two largest
are seeded with their full cross product; every further parameter first
extends the existing rows (horizontal growth) and then appends the fewest new
rows that cover what is still missing (vertical growth). All work happens on
value indices, so domain values are never hashed or compared here.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .bounds import compute_pairwise_lower_bound, count_pair_requirements
from .cartesian import CartesianProduct
from .errors import InternalInvariantError
from .model import ParameterSpace
from .preflight import raise_for_report, validate_generation_preflight
from .verify import MAX_REPORTED, describe_pair, find_missing_pairs

logger = logging.getLogger(__name__)


class PairCoverage:
    """
    Uncovered pair requirements keyed by internal column pair (i, k), i < k.
    Each entry holds the (value of i, value of k) index pairs not yet seen in
    any row. Columns are tracked once opened with add_column.
    """
    def __init__(self, counts: Sequence[int]):
        self.counts = list(counts)
        self._uncovered: Dict[Tuple[int, int], Set[Tuple[int, int]]] = {}
        self.remaining = 0

    def add_column(self, k: int) -> None:
        for i in range(k):
            reqs = {(a, b) for a in range(self.counts[i]) for b in range(self.counts[k])}
            self._uncovered[(i, k)] = reqs
            self.remaining += len(reqs)

    def gain(self, row: Sequence[int], k: int, value: int) -> int:
        """How many uncovered requirements row would cover with column k set to value."""
        return sum(1 for i in range(k) if (row[i], value) in self._uncovered[(i, k)])

    def cover_row(self, row: Sequence[int], k: int) -> int:
        """Marks pairs between column k and each earlier column of row as covered."""
        newly = 0
        for i in range(k):
            pending = self._uncovered[(i, k)]
            pair = (row[i], row[k])
            if pair in pending:
                pending.discard(pair)
                newly += 1
        self.remaining -= newly
        return newly

    def uncovered_for(self, k: int) -> List[Tuple[int, int, int]]:
        """Uncovered requirements of column k as (value of k, column, value), sorted."""
        reqs = []
        for i in range(k):
            for vi, vk in self._uncovered[(i, k)]:
                reqs.append((vk, i, vi))
        reqs.sort()
        return reqs


def _seed(counts: Sequence[int]) -> List[List[int]]:
    if len(counts) == 1:
        return [[v] for v in range(counts[0])]
    return [list(t) for t in CartesianProduct([range(counts[0]), range(counts[1])])]


def _grow_horizontally(rows: List[List[int]], coverage: PairCoverage, k: int) -> None:
    for row in rows:
        best_value = 0
        best_gain = -1
        # strict comparison keeps the earliest value on ties
        for v in range(coverage.counts[k]):
            g = coverage.gain(row, k, v)
            if g > best_gain:
                best_value, best_gain = v, g
        row.append(best_value)
        coverage.cover_row(row, k)


def _grow_vertically(rows: List[List[int]], coverage: PairCoverage, k: int) -> int:
    """
    Packs every requirement still open for column k into new rows.

    A requirement (vk, i, vi) joins the first new row that already carries vk
    in column k and has column i free; otherwise it opens a row. Per value of
    k this opens exactly as many rows as the busiest column needs.
    """
    pending = coverage.uncovered_for(k)
    if not pending:
        return 0

    new_rows: List[List[Optional[int]]] = []
    for vk, i, vi in pending:
        for row in new_rows:
            if row[k] == vk and row[i] is None:
                row[i] = vi
                break
        else:
            row = [None] * (k + 1)
            row[k] = vk
            row[i] = vi
            new_rows.append(row)

    for row in new_rows:
        for c in range(k):
            if row[c] is None:
                row[c] = 0
        for c in range(1, k + 1):
            coverage.cover_row(row, c)
        rows.append(row)
    return len(new_rows)


def build_covering_array(counts: Sequence[int]) -> List[List[int]]:
    """Builds a strength-2 covering array of value indices for columns in the given order."""
    coverage = PairCoverage(counts)
    rows = _seed(counts)
    if len(counts) > 1:
        coverage.add_column(1)
        for row in rows:
            coverage.cover_row(row, 1)
    logger.debug("all-pairs seed: %d rows for counts %s", len(rows), list(counts[:2]))

    for k in range(2, len(counts)):
        coverage.add_column(k)
        _grow_horizontally(rows, coverage, k)
        after_horizontal = coverage.remaining
        added = _grow_vertically(rows, coverage, k)
        logger.debug(
            "all-pairs column %d (%d values): %d left after horizontal growth, %d rows added",
            k, counts[k], after_horizontal, added
        )
        if coverage.remaining:
            raise InternalInvariantError(
                f"{coverage.remaining} pair requirements still uncovered after placing column {k}."
            )
    return rows


def all_pairs(space: Any) -> List[Tuple[Any, ...]]:
    """Returns a near-minimal list of tuples covering every value pair of every two parameters."""
    space = ParameterSpace.coerce(space)
    raise_for_report(validate_generation_preflight(space))

    order = space.get_reordered_indices()
    counts = space.get_counts()
    internal_counts = [counts[i] for i in order]
    logger.debug(
        "all-pairs: internal order %s, %d requirements",
        [space.parameters[i].name for i in order], count_pair_requirements(counts)
    )

    internal_rows = build_covering_array(internal_counts)

    position = [0] * len(order)
    for internal, declared in enumerate(order):
        position[declared] = internal
    index_rows = [[row[position[c]] for c in range(len(order))] for row in internal_rows]

    missing = find_missing_pairs(counts, index_rows, limit=MAX_REPORTED)
    if missing:
        raise InternalInvariantError(
            "Generated suite does not cover every value pair.",
            missing_pairs=[describe_pair(space, *m) for m in missing],
        )

    lb = compute_pairwise_lower_bound(counts)
    logger.debug("all-pairs: %d rows (lower bound %d)", len(index_rows), lb)
    return [tuple(p.values[row[c]] for c, p in enumerate(space.parameters)) for row in index_rows]
