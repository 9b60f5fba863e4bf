"""Coverage verification logic."""
from typing import Any, List, Sequence, Tuple

from .model import ParameterSpace

MAX_REPORTED = 20


def index_of(values: Sequence[Any], val: Any) -> int:
    """Position of val in values by identity or equality, -1 if absent. Never hashes."""
    for idx, v in enumerate(values):
        if v is val or v == val:
            return idx
    return -1


def rows_to_indices(space: ParameterSpace, rows: Sequence[Sequence[Any]]) -> List[List[int]]:
    """
    Maps each cell to its position in the column's domain.
    Rows shorter than the space are skipped.
    """
    num_params = len(space.parameters)
    index_rows = []
    for row_idx, row in enumerate(rows):
        if len(row) < num_params:
            continue
        row_v_indices = []
        for i, p in enumerate(space.parameters):
            pos = index_of(p.values, row[i])
            if pos < 0:
                raise ValueError(f"CRITICAL: Generated value '{row[i]}' at row {row_idx+1}, col {i+1} is not a valid parameter value in the model for '{p.name}'.")
            row_v_indices.append(pos)
        index_rows.append(row_v_indices)
    return index_rows


def find_missing_pairs(counts: Sequence[int], index_rows: Sequence[Sequence[int]],
                       limit: int = None) -> List[Tuple[int, int, int, int]]:
    """Returns uncovered (i, j, vi, vj) requirements, i < j, in column then value order."""
    num_params = len(counts)
    # covered_pairs[(p1_idx, p2_idx)] = set of (v1_idx, v2_idx)
    covered_pairs = {}
    for i in range(num_params):
        for j in range(i + 1, num_params):
            covered_pairs[(i, j)] = set()

    for row in index_rows:
        for i in range(num_params):
            for j in range(i + 1, num_params):
                covered_pairs[(i, j)].add((row[i], row[j]))

    missing = []
    for i in range(num_params):
        for j in range(i + 1, num_params):
            if len(covered_pairs[(i, j)]) == counts[i] * counts[j]:
                continue
            for v1_idx in range(counts[i]):
                for v2_idx in range(counts[j]):
                    if (v1_idx, v2_idx) not in covered_pairs[(i, j)]:
                        missing.append((i, j, v1_idx, v2_idx))
                        if limit is not None and len(missing) >= limit:
                            return missing
    return missing


def describe_pair(space: ParameterSpace, i: int, j: int, vi: int, vj: int) -> str:
    p1 = space.parameters[i]
    p2 = space.parameters[j]
    return f"({p1.name}: {p1.values[vi]}, {p2.name}: {p2.values[vj]})"


def verify_pairwise_coverage(space: Any, rows: Sequence[Sequence[Any]]) -> Tuple[bool, List[str]]:
    """
    Verifies that all possible pairs of parameter values are covered in the generated test suite.
    Assumes `rows` are ordered according to the declared parameters of the space.
    With fewer than two parameters there are no pairs, so every value must appear.
    """
    space = ParameterSpace.coerce(space)
    if len(space.parameters) < 2:
        return verify_all_values(space, rows)

    index_rows = rows_to_indices(space, rows)
    missing = find_missing_pairs(space.get_counts(), index_rows, limit=MAX_REPORTED)
    missing_pairs = [describe_pair(space, *m) for m in missing]
    return len(missing_pairs) == 0, missing_pairs


def verify_all_values(space: Any, rows: Sequence[Sequence[Any]]) -> Tuple[bool, List[str]]:
    """Verifies that every value of every parameter appears in its own column."""
    space = ParameterSpace.coerce(space)
    index_rows = rows_to_indices(space, rows)
    missing = []
    for i, p in enumerate(space.parameters):
        seen = {row[i] for row in index_rows}
        for v_idx, v in enumerate(p.values):
            if v_idx not in seen:
                missing.append(f"({p.name}: {v})")
                if len(missing) >= MAX_REPORTED:
                    return False, missing
    return len(missing) == 0, missing
