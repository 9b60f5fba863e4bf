"""All-values strategy: every value of every parameter at least once."""
import logging
from typing import Any, List, Tuple

from .model import ParameterSpace
from .preflight import raise_for_report, validate_generation_preflight

logger = logging.getLogger(__name__)


def all_values(space: Any) -> List[Tuple[Any, ...]]:
    """
    Returns max(cardinality) tuples. Column i of tuple t holds
    values_i[t mod cardinality_i], so shorter domains cycle round-robin while
    the longest one is walked exactly once.
    """
    space = ParameterSpace.coerce(space)
    raise_for_report(validate_generation_preflight(space))

    domains = space.domains
    rows = max(len(d) for d in domains)
    logger.debug("all-values: %d parameters, %d rows", len(domains), rows)
    return [tuple(d[t % len(d)] for d in domains) for t in range(rows)]
