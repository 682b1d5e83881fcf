"""
Resampling engine shared by the permutation and bootstrap procedures.

Usage:
    from pygroupstats.montecarlo import replicate

    null = replicate(kernel, R=5000, seed=42, n_workers=4)

The same (seed, R, batch_size) always yields the same replicates, whatever
n_workers is.
"""

from pygroupstats.montecarlo._engine import (
    replicate,
    resolve_seed,
    permutation_indices,
    bootstrap_indices,
)
from pygroupstats.montecarlo._pvalue import (
    tail_count,
    monte_carlo_p_value,
    exact_p_value,
)

__all__ = [
    "replicate",
    "resolve_seed",
    "permutation_indices",
    "bootstrap_indices",
    "tail_count",
    "monte_carlo_p_value",
    "exact_p_value",
]
