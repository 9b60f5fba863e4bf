"""Full cross product of parameter domains in odometer order."""
from itertools import product
from typing import Any, Iterator, List, Sequence, Tuple

from .model import ParameterSpace
from .preflight import raise_for_report, validate_generation_preflight


class CartesianProduct:
    """Lazy, restartable cross product of domains.

    The first domain varies slowest and the last varies fastest. Each call to
    ``iter()`` starts a fresh pass; the domains are never mutated.
    """
    def __init__(self, domains: Sequence[Sequence[Any]]):
        self.domains = tuple(tuple(d) for d in domains)

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return product(*self.domains)

    def __len__(self) -> int:
        total = 1
        for d in self.domains:
            total *= len(d)
        return total


def enumerate_cartesian(space: Any) -> CartesianProduct:
    """Validates the space and returns its full cross product."""
    space = ParameterSpace.coerce(space)
    raise_for_report(validate_generation_preflight(space))
    return CartesianProduct(space.domains)


def all_combinations(space: Any) -> List[Tuple[Any, ...]]:
    return list(enumerate_cartesian(space))
