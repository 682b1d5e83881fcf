"""
One-way group-mean model.

Fits y_ij = mu_j + e_ij by group means and exposes the sum-of-squares
partition used by omega-squared, the classic F test, linear contrasts,
Brown-Forsythe and the residual diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class OneWayFit:
    """
    Fitted group-mean model.

    Attributes:
        levels: Group labels in model order
        sizes: n_j, shape (k,)
        means: Group means (the estimated marginal means), shape (k,)
        variances: Group sample variances (n-1), shape (k,); NaN for n_j < 2
        grand_mean: Mean of all observations
        ss_between, ss_within, ss_total: Sum-of-squares partition
        df_between, df_within: k - 1 and N - k
        ms_within: ss_within / df_within (NaN if df_within == 0)
        fitted: Group mean of every observation, shape (N,)
    """
    levels: tuple[str, ...]
    sizes: NDArray[np.intp]
    means: NDArray[np.floating[Any]]
    variances: NDArray[np.floating[Any]]
    grand_mean: float
    ss_between: float
    ss_within: float
    ss_total: float
    df_between: int
    df_within: int
    ms_within: float
    fitted: NDArray[np.floating[Any]]

    @property
    def n(self) -> int:
        return int(np.sum(self.sizes))

    @property
    def k(self) -> int:
        return len(self.levels)


def fit_oneway(
    y: NDArray[np.floating[Any]],
    codes: NDArray[np.intp],
    levels: tuple[str, ...],
) -> OneWayFit:
    """
    Fit the group-mean model.

    Args:
        y: Responses, shape (N,)
        codes: Group index per observation, values in 0..k-1
        levels: Group labels, length k

    Returns:
        OneWayFit
    """
    k = len(levels)
    n = len(y)
    sizes = np.bincount(codes, minlength=k)
    sums = np.bincount(codes, weights=y, minlength=k)
    means = sums / sizes
    fitted = means[codes]
    resid = y - fitted

    ss_within_j = np.bincount(codes, weights=resid ** 2, minlength=k)
    with np.errstate(invalid='ignore', divide='ignore'):
        variances = np.where(sizes > 1, ss_within_j / (sizes - 1), np.nan)

    grand_mean = float(np.mean(y))
    ss_between = float(np.sum(sizes * (means - grand_mean) ** 2))
    ss_within = float(np.sum(ss_within_j))
    ss_total = float(np.sum((y - grand_mean) ** 2))

    df_between = k - 1
    df_within = n - k
    ms_within = ss_within / df_within if df_within > 0 else float('nan')

    return OneWayFit(
        levels=tuple(levels),
        sizes=sizes.astype(np.intp),
        means=means,
        variances=variances,
        grand_mean=grand_mean,
        ss_between=ss_between,
        ss_within=ss_within,
        ss_total=ss_total,
        df_between=df_between,
        df_within=df_within,
        ms_within=ms_within,
        fitted=fitted,
    )
