"""Strategy selection and generation orchestration."""
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .bounds import compute_all_values_size, compute_exhaustive_size, compute_pairwise_lower_bound
from .cartesian import all_combinations
from .cyclic import all_values
from .errors import LimitExceededError
from .model import ParameterSpace
from .pairwise import all_pairs
from .preflight import raise_for_report, validate_generation_preflight
from .verify import rows_to_indices, verify_all_values, verify_pairwise_coverage

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    ALL_VALUES = "all-values"
    ALL_PAIRS = "all-pairs"
    ALL_COMBINATIONS = "all-combinations"

    @classmethod
    def parse(cls, value: Any) -> "Strategy":
        """Accepts a Strategy or names like 'all-pairs', 'ALL_PAIRS', 'all pairs'."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy '{value}'. Choose one of: {choices}.") from None


_GENERATORS: Dict[Strategy, Callable[[ParameterSpace], List[Tuple[Any, ...]]]] = {
    Strategy.ALL_VALUES: all_values,
    Strategy.ALL_PAIRS: all_pairs,
    Strategy.ALL_COMBINATIONS: all_combinations,
}


def expected_size(strategy: Strategy, counts: List[int]) -> int:
    """Exact output size for all-values and all-combinations, lower bound for all-pairs."""
    strategy = Strategy.parse(strategy)
    if strategy == Strategy.ALL_VALUES:
        return compute_all_values_size(counts)
    if strategy == Strategy.ALL_PAIRS:
        return compute_pairwise_lower_bound(counts)
    return compute_exhaustive_size(counts)


def generate_combinations(space: Any, strategy: Any = Strategy.ALL_PAIRS) -> List[Tuple[Any, ...]]:
    """Validates the space and returns the strategy's tuples in generation order."""
    strategy = Strategy.parse(strategy)
    space = ParameterSpace.coerce(space)
    raise_for_report(validate_generation_preflight(space))
    logger.debug("Generating %s over %d parameters", strategy.value, len(space))
    return _GENERATORS[strategy](space)


def verify_combinations(space: Any, strategy: Any, rows: List[Tuple[Any, ...]]) -> Tuple[bool, List[str]]:
    """Checks rows against the coverage guarantee of the strategy."""
    strategy = Strategy.parse(strategy)
    space = ParameterSpace.coerce(space)
    if strategy == Strategy.ALL_VALUES:
        return verify_all_values(space, rows)
    if strategy == Strategy.ALL_PAIRS:
        return verify_pairwise_coverage(space, rows)

    index_rows = [tuple(r) for r in rows_to_indices(space, rows)]
    problems = []
    if len(set(index_rows)) != len(index_rows):
        problems.append("duplicate combinations")
    exhaustive = compute_exhaustive_size(space.get_counts())
    if len(index_rows) != exhaustive:
        problems.append(f"expected {exhaustive} combinations, got {len(index_rows)}")
    return not problems, problems


class GenerationResult:
    def __init__(self, strategy: Strategy, rows: List[Tuple[Any, ...]], lb: int, exhaustive: int,
                 verified: bool, missing: List[str], headers: List[str],
                 reordered_params: Optional[List[str]] = None):
        self.strategy = strategy
        self.rows = rows
        self.n = len(rows)
        self.lb = lb
        self.exhaustive = exhaustive
        self.passed_verification = verified
        self.missing = missing
        self.canonical_headers = headers
        self.reordered_params = reordered_params or []

    def metadata(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy.value,
            "lb": self.lb,
            "n": self.n,
            "exhaustive": self.exhaustive,
            "verified": self.passed_verification,
        }


def generate_suite(space: Any,
                   strategy: Any = Strategy.ALL_PAIRS,
                   verify: bool = True,
                   max_params: Optional[int] = None,
                   max_values_per_param: Optional[int] = None,
                   max_total_values: Optional[int] = None,
                   max_cases: Optional[int] = None) -> GenerationResult:
    """
    Generates a suite and reports its size against the strategy's bound.

    max_cases caps the planned suite size before anything is generated: the
    exact size for all-values and all-combinations, the lower bound for all-pairs.
    """
    strategy = Strategy.parse(strategy)
    space = ParameterSpace.coerce(space)
    raise_for_report(validate_generation_preflight(
        space,
        max_params=max_params,
        max_values_per_param=max_values_per_param,
        max_total_values=max_total_values,
    ))

    planned = expected_size(strategy, space.get_counts())
    if max_cases is not None and planned > max_cases:
        raise LimitExceededError(
            f"Model Safety Violation: {strategy.value} would generate {planned} cases, exceeding limit of {max_cases}."
        )

    rows = generate_combinations(space, strategy)
    counts = space.get_counts()

    passed, missing = False, []
    if verify:
        passed, missing = verify_combinations(space, strategy, rows)
        if not passed:
            logger.debug("Verification of %s failed: %s", strategy.value, missing)

    reordered = None
    if strategy == Strategy.ALL_PAIRS:
        reordered = [p.name for p in space.get_reordered_parameters()]

    return GenerationResult(
        strategy, rows, expected_size(strategy, counts), compute_exhaustive_size(counts),
        passed, missing, space.names, reordered
    )
