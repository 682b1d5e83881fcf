"""
Permutation one-way ANOVA.

Labels are shuffled over the pooled responses. Because N, the group sizes
and the total sum of squares are fixed under relabelling, F is a monotone
function of the between-group sum of squares, and in turn of
sum_j S_j^2 / n_j (S_j the group sum). The null distribution is built on
that cheapest equivalent statistic.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.montecarlo import (
    monte_carlo_p_value,
    permutation_indices,
    replicate,
)


def between_statistic(
    y: NDArray[np.floating[Any]],
    onehot: NDArray[np.floating[Any]],
    sizes: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]] | float:
    """sum_j S_j^2 / n_j for y of shape (N,) or (B, N)."""
    sums = y @ onehot
    return np.sum(sums ** 2 / sizes, axis=-1)


def permutation_p_value(
    y: NDArray[np.floating[Any]],
    codes: NDArray[np.intp],
    k: int,
    n_perm: int,
    *,
    seed: Any = None,
    n_workers: int = 1,
) -> tuple[float, int]:
    """
    (p, R) with p = (#{perm >= observed} + 1) / (R + 1).
    """
    n = len(y)
    onehot = np.zeros((n, k))
    onehot[np.arange(n), codes] = 1.0
    sizes = onehot.sum(axis=0)
    observed = float(between_statistic(y, onehot, sizes))

    def kernel(rng: np.random.Generator, size: int) -> NDArray[np.floating[Any]]:
        return between_statistic(y[permutation_indices(rng, size, n)], onehot, sizes)

    null = replicate(kernel, n_perm, seed=seed, n_workers=n_workers)
    return monte_carlo_p_value(null, observed, "greater"), len(null)
