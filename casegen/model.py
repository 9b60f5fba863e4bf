"""Defines parameters, the parameter space, and the text model format."""
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Sequence, Tuple

from .errors import InvalidSpaceError
from .preflight import raise_for_report, validate_generation_preflight


@dataclass(frozen=True)
class Parameter:
    name: str
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if isinstance(self.values, (str, bytes)):
            raise TypeError(f"Parameter '{self.name}' values must be a sequence of values, not a string.")
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def cardinality(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ParameterSpace:
    """An ordered, read-only collection of parameters.

    Column order is significant: every generated tuple lists one value per
    parameter in exactly this order. An empty space or an empty domain can be
    constructed; generation rejects them.
    """
    parameters: Tuple[Parameter, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def __len__(self) -> int:
        return len(self.parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self.parameters)

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.parameters]

    @property
    def domains(self) -> List[Tuple[Any, ...]]:
        return [p.values for p in self.parameters]

    def get_counts(self) -> List[int]:
        return [len(p.values) for p in self.parameters]

    def get_reordered_indices(self) -> List[int]:
        """Returns column indices sorted by value count descending, stable tie-break."""
        counts = self.get_counts()
        return sorted(range(len(counts)), key=lambda i: counts[i], reverse=True)

    def get_reordered_parameters(self) -> List[Parameter]:
        return [self.parameters[i] for i in self.get_reordered_indices()]

    def validate_limits(self, max_params: int = 50, max_values_per_param: int = 50, max_total_values: int = 500):
        """Throws LimitExceededError if the space exceeds limits."""
        report = validate_generation_preflight(
            self,
            max_params=max_params,
            max_values_per_param=max_values_per_param,
            max_total_values=max_total_values,
        )
        raise_for_report(report)

    @classmethod
    def from_domains(cls, domains: Sequence[Sequence[Any]], names: Sequence[str] = None) -> "ParameterSpace":
        domains = list(domains)
        if names is None:
            names = [f"p{i + 1}" for i in range(len(domains))]
        elif len(names) != len(domains):
            raise ValueError(f"Got {len(names)} names for {len(domains)} parameters.")
        return cls(tuple(Parameter(n, d) for n, d in zip(names, domains)))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[Any]]) -> "ParameterSpace":
        return cls(tuple(Parameter(name, values) for name, values in mapping.items()))

    @classmethod
    def coerce(cls, obj: Any) -> "ParameterSpace":
        """Accepts a space, a name -> values mapping, or a sequence of domains or parameters."""
        if isinstance(obj, ParameterSpace):
            return obj
        if isinstance(obj, Mapping):
            return cls.from_mapping(obj)
        if isinstance(obj, (str, bytes)):
            raise TypeError("A parameter space cannot be built from a string.")
        items = list(obj)
        if all(isinstance(item, Parameter) for item in items):
            return cls(tuple(items))
        return cls.from_domains(items)

    def to_model_text(self, parameters: Sequence[Parameter] = None) -> str:
        params = parameters if parameters is not None else self.parameters
        lines = []
        for p in params:
            vals_str = ", ".join(str(v) for v in p.values)
            lines.append(f"{p.name}: {vals_str}")
        return "\n".join(lines) + "\n"

    @classmethod
    def from_model_text(cls, content: str) -> "ParameterSpace":
        parameters: List[Parameter] = []
        existing_lower = set()
        for i, line in enumerate(content.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith('#') or line.startswith('//'):
                continue
            if ':' not in line:
                raise ValueError(f"Line {i}: Missing colon in parameter definition: '{line}'")

            name_part, vals_part = line.split(':', 1)
            name = name_part.strip()
            if not name:
                raise ValueError(f"Line {i}: Parameter name is empty.")
            if name.lower() in existing_lower:
                raise ValueError(f"Line {i}: Duplicate parameter name detected: '{name}'")
            existing_lower.add(name.lower())

            try:
                values = _clean_values(name, vals_part.split(','))
            except ValueError as e:
                raise ValueError(f"Line {i}: {str(e)}")
            parameters.append(Parameter(name, values))

        if not parameters:
            raise InvalidSpaceError("Model must contain at least 1 parameter.")

        return cls(tuple(parameters))


def _clean_values(name: str, values: Sequence[str]) -> List[str]:
    cleaned_values = []
    seen_values = set()
    for v in values:
        v_clean = v.strip()
        if not v_clean:
            raise ValueError(f"Parameter '{name}' contains an empty value.")
        if '\t' in v_clean or '\n' in v_clean:
            raise ValueError(f"Parameter '{name}' value '{v_clean}' contains invalid characters (comma, tab, newline).")
        v_lower = v_clean.lower()
        if v_lower in seen_values:
            raise ValueError(f"Parameter '{name}' contains duplicate value (case-insensitive): '{v_clean}'")
        seen_values.add(v_lower)
        cleaned_values.append(v_clean)
    return cleaned_values
