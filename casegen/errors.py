"""Error taxonomy for combination generation."""
from typing import List, Optional


class CombinationError(Exception):
    """Base class for all generation errors."""


class InvalidSpaceError(CombinationError, ValueError):
    """Raised when a parameter space declares no parameters."""


class EmptyDomainError(CombinationError, ValueError):
    """Raised when a parameter declares no values."""
    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class LimitExceededError(CombinationError, ValueError):
    """Raised when a space exceeds a configured size limit."""


class InternalInvariantError(CombinationError):
    """Raised when a generated suite fails its own coverage check."""
    def __init__(self, message: str, missing_pairs: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_pairs = missing_pairs or []
