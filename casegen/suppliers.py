"""Registration contract between case generation and test runners.

A test runner asks a registry for cases by name; each name maps to a
zero-argument callable that produces a list of tuples. ``parametrize_args``
shapes a generated suite for ``pytest.mark.parametrize``.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .factory import Strategy, generate_combinations
from .model import ParameterSpace

CaseSupplier = Callable[[], List[Tuple[Any, ...]]]


class CaseRegistry:
    def __init__(self):
        self._suppliers: Dict[str, CaseSupplier] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._suppliers

    def names(self) -> List[str]:
        return list(self._suppliers)

    def register(self, name: str, supplier: CaseSupplier) -> CaseSupplier:
        if not name:
            raise ValueError("Case supplier name cannot be empty.")
        if name in self._suppliers:
            raise ValueError(f"Duplicate case supplier name detected: '{name}'")
        self._suppliers[name] = supplier
        return supplier

    def supplier(self, name: Optional[str] = None, strategy: Any = Strategy.ALL_PAIRS):
        """Registers a function returning a parameter space, expanded with strategy on demand."""
        strategy = Strategy.parse(strategy)

        def decorator(fn: Callable[[], Any]) -> Callable[[], Any]:
            def produce() -> List[Tuple[Any, ...]]:
                return generate_combinations(fn(), strategy)

            self.register(name or fn.__name__, produce)
            return fn
        return decorator

    def cases(self, name: str) -> List[Tuple[Any, ...]]:
        try:
            supplier = self._suppliers[name]
        except KeyError:
            raise KeyError(f"No case supplier registered under '{name}'.") from None
        return list(supplier())


def parametrize_args(space: Any, strategy: Any = Strategy.ALL_PAIRS,
                     argnames: Union[str, Sequence[str], None] = None) -> Tuple[str, List[Any]]:
    """
    Returns (argnames, argvalues) for pytest.mark.parametrize.

    argnames defaults to the parameter names. A single parameter yields bare
    values instead of 1-tuples, as pytest expects.
    """
    space = ParameterSpace.coerce(space)
    if argnames is None:
        names = space.names
    elif isinstance(argnames, str):
        names = [n.strip() for n in argnames.split(",")]
    else:
        names = list(argnames)
    if len(names) != len(space):
        raise ValueError(f"Got {len(names)} argument names for {len(space)} parameters.")

    cases = generate_combinations(space, strategy)
    if len(names) == 1:
        return names[0], [case[0] for case in cases]
    return ",".join(names), cases
