"""
Generic result container for all pygroupstats computations.

The Result class provides a standardized envelope that every procedure's
result uses. This enables shared handling of timing, warnings and metadata
while each component defines its own parameter payload.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, mode, resample counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The component-specific parameter payload type

    Attributes:
        params: Component-specific payload (statistic, p-value, estimates...)
        info: Structured metadata (method, seed, effective resample count)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=OmnibusParams(...),
        ...     info={'method': 'welch'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_welch',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
