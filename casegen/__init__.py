"""casegen: all-values, all-pairs and all-combinations test case generation."""
from .errors import (
    CombinationError,
    EmptyDomainError,
    InternalInvariantError,
    InvalidSpaceError,
    LimitExceededError,
)
from .model import Parameter, ParameterSpace
from .cartesian import CartesianProduct, all_combinations, enumerate_cartesian
from .cyclic import all_values
from .pairwise import all_pairs
from .factory import GenerationResult, Strategy, generate_combinations, generate_suite
from .suppliers import CaseRegistry, parametrize_args

__version__ = "1.0.0"

EXIT_SUCCESS = 0
EXIT_VALIDATION = 2
EXIT_GENERATION_ERR = 3
EXIT_VERIF_ERR = 4

__all__ = [
    "CombinationError",
    "EmptyDomainError",
    "InternalInvariantError",
    "InvalidSpaceError",
    "LimitExceededError",
    "Parameter",
    "ParameterSpace",
    "CartesianProduct",
    "all_combinations",
    "enumerate_cartesian",
    "all_values",
    "all_pairs",
    "GenerationResult",
    "Strategy",
    "generate_combinations",
    "generate_suite",
    "CaseRegistry",
    "parametrize_args",
]
