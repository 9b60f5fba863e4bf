"""Computes output sizes and lower bounds for a given space."""
from typing import List


def compute_pairwise_lower_bound(counts: List[int]) -> int:
    """
    Computes the maximum product of any two parameter value counts.
    LB = max_{i<j} (v_i * v_j).
    A single parameter is covered by listing its values, so LB = v_0.
    If there are no parameters, returns 0.
    """
    if not counts:
        return 0
    if len(counts) == 1:
        return counts[0]

    max_lb = 0
    for i in range(len(counts)):
        for j in range(i + 1, len(counts)):
            product = counts[i] * counts[j]
            if product > max_lb:
                max_lb = product
    return max_lb


def compute_all_values_size(counts: List[int]) -> int:
    return max(counts) if counts else 0


def compute_exhaustive_size(counts: List[int]) -> int:
    if not counts:
        return 0
    total = 1
    for c in counts:
        total *= c
    return total


def count_pair_requirements(counts: List[int]) -> int:
    """Number of value pairs an all-pairs suite must cover."""
    total = 0
    for i in range(len(counts)):
        for j in range(i + 1, len(counts)):
            total += counts[i] * counts[j]
    return total
