"""
Bootstrap trimmed-means ANOVA (WRS2::t1waybt).

Each group is centred at its trimmed mean so that H0 holds in the
resampling population, resampled with replacement within group, and the
t1way F recomputed. Resamples in which some group has zero winsorized
variance have no defined F and are dropped.

    p = (#{F* >= F} + 1) / (effective + 1)
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.anova._welch import t1way_batch
from pygroupstats.core.compute.robust import trimmed_mean
from pygroupstats.core.exceptions import NumericalError
from pygroupstats.montecarlo import bootstrap_indices, monte_carlo_p_value, replicate


def t1waybt_p_value(
    samples: list[NDArray[np.floating[Any]]],
    observed: float,
    trim: float,
    n_boot: int,
    *,
    seed: Any = None,
    n_workers: int = 1,
) -> tuple[float, int]:
    """
    (p, effective resample count).

    Raises:
        NumericalError: If no resample produced a defined statistic
    """
    centred = [s - trimmed_mean(s, trim) for s in samples]

    def kernel(rng: np.random.Generator, size: int) -> NDArray[np.floating[Any]]:
        boot = [c[bootstrap_indices(rng, size, len(c))] for c in centred]
        f, _, _ = t1way_batch(boot, trim)
        return f

    f_star = replicate(kernel, n_boot, seed=seed, n_workers=n_workers)
    f_star = f_star[~np.isnan(f_star)]
    if len(f_star) == 0:
        raise NumericalError(
            "trimmed_bootstrap: every bootstrap resample had a zero-variance group"
        )
    return monte_carlo_p_value(f_star, observed, "greater"), len(f_star)
