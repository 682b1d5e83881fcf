"""
Robust effect sizes built on trimmed means and winsorized variances.

Algina-Keselman-Penfield robust d (WRS2 akp.effect):
    d_R = sqrt(c(tr)) * (tm1 - tm2) / s_w,
    s_w^2 = ((n1 - 1) w1 + (n2 - 1) w2) / (n1 + n2 - 2)
where w_j are winsorized variances and c(tr) is the winsorized variance of
the standard normal, so d_R estimates Cohen's d under normality.

Explanatory measure of effect size (Wilcox & Tian, 2011):
    xi^2 = var(trimmed means) / (winvar(pooled data) / c(tr))
The k trimmed means enter with the k - 1 denominator. With unequal group
sizes, xi^2 is averaged over random equal-size subsamples so that the larger
groups do not dominate the pooled winsorized variance. xi^2 is capped at 1.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.compute.robust import (
    normal_winsor_constant,
    trimmed_mean,
    winsorized_variance,
)
from pygroupstats.core.exceptions import DegenerateGroupsError

# Equal-size subsamples averaged by the explanatory measure when n_j differ
EXPLANATORY_SUBSAMPLES = 100


def akp_d_batch(
    x1: NDArray[np.floating[Any]],
    x2: NDArray[np.floating[Any]],
    trim: float,
) -> NDArray[np.floating[Any]]:
    """
    Robust d for matching rows of two sample batches.

    x1: (B, n1), x2: (B, n2). Rows with zero pooled winsorized variance
    return NaN (the caller decides whether that is an error).
    """
    n1, n2 = x1.shape[-1], x2.shape[-1]
    tm1 = trimmed_mean(x1, trim)
    tm2 = trimmed_mean(x2, trim)
    w1 = winsorized_variance(x1, trim)
    w2 = winsorized_variance(x2, trim)
    pooled = ((n1 - 1) * w1 + (n2 - 1) * w2) / (n1 + n2 - 2)
    c = np.sqrt(normal_winsor_constant(trim))
    with np.errstate(invalid='ignore', divide='ignore'):
        d = np.where(pooled > 0, c * (tm1 - tm2) / np.sqrt(pooled), np.nan)
    return d


def akp_d_value(
    x1: NDArray[np.floating[Any]],
    x2: NDArray[np.floating[Any]],
    trim: float,
    labels: tuple[str, str] = ("1", "2"),
) -> float:
    """Robust d point estimate, group 1 minus group 2."""
    d = float(akp_d_batch(x1[np.newaxis, :], x2[np.newaxis, :], trim)[0])
    if np.isnan(d):
        raise DegenerateGroupsError(
            "robust d: pooled winsorized variance is 0",
            groups=labels,
        )
    return d


def _xi_squared(samples: list[NDArray[np.floating[Any]]], trim: float) -> float:
    tmeans = np.array([trimmed_mean(s, trim) for s in samples])
    top = float(np.var(tmeans, ddof=1))
    pooled = np.concatenate(samples)
    bot = winsorized_variance(pooled, trim) / normal_winsor_constant(trim)
    if bot <= 0:
        return float('nan')
    return min(1.0, top / bot)


def explanatory_xi(
    samples: list[NDArray[np.floating[Any]]],
    trim: float,
    rng: np.random.Generator,
    labels: tuple[str, ...] = (),
) -> float:
    """
    Explanatory measure xi (square root of xi^2).

    Raises:
        DegenerateGroupsError: If the pooled winsorized variance is 0
    """
    sizes = [len(s) for s in samples]
    if len(set(sizes)) == 1:
        xi2 = _xi_squared(samples, trim)
    else:
        n_min = min(sizes)
        vals = np.empty(EXPLANATORY_SUBSAMPLES)
        for i in range(EXPLANATORY_SUBSAMPLES):
            sub = [rng.choice(s, size=n_min, replace=False) for s in samples]
            vals[i] = _xi_squared(sub, trim)
        vals = vals[~np.isnan(vals)]
        xi2 = float(np.mean(vals)) if len(vals) else float('nan')
    if np.isnan(xi2):
        raise DegenerateGroupsError(
            "explanatory effect size: pooled winsorized variance is 0",
            groups=labels,
        )
    return float(np.sqrt(xi2))
