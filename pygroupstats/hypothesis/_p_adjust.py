"""
Multiple testing correction matching R's p.adjust().

Methods: holm, hochberg, hommel, bonferroni, BH, BY, fdr (alias of BH), none.

The step-up family (hochberg, BH, BY) shares one kernel: sort descending,
scale each p by a rank-dependent factor, then take the running minimum so
that adjusted values are monotone in raw-p order.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pygroupstats.core.exceptions import InvalidConfigurationError, ValidationError

VALID_METHODS = (
    "holm", "hochberg", "hommel", "bonferroni", "BH", "BY", "fdr", "none"
)


def check_p_adjust_method(method: str) -> str:
    """
    Raises:
        InvalidConfigurationError: Unless method is a p.adjust method name
    """
    if method not in VALID_METHODS:
        raise InvalidConfigurationError(
            f"p_adjust: method must be one of {VALID_METHODS}, got {method!r}",
            parameter="p_adjust", value=method,
        )
    return method


def p_adjust(
    p: ArrayLike,
    method: str = "fdr",
    n: int | None = None,
) -> NDArray[np.floating]:
    """
    Adjust p-values for multiple comparisons. Matches R p.adjust().

    Parameters
    ----------
    p : array-like
        Vector of p-values. NaN entries are passed through and do not count
        towards the number of tests.
    method : str
        "fdr" (default here; R's default is "holm"), "BH", "BY", "holm",
        "hochberg", "hommel", "bonferroni" or "none".
    n : int or None
        Number of tests. Default: number of non-NaN p-values. May exceed it
        when some p-values were not computed.

    Returns
    -------
    ndarray
        Adjusted p-values in input order, clipped to [0, 1].
    """
    check_p_adjust_method(method)
    p_arr = np.asarray(p, dtype=np.float64).ravel()
    out = p_arr.copy()

    valid = ~np.isnan(p_arr)
    pv = p_arr[valid]
    m = len(pv) if n is None else int(n)
    if m < len(pv):
        raise ValidationError(
            f"p_adjust: n ({m}) must be >= number of p-values ({len(pv)})"
        )
    if len(pv) == 0 or method == "none":
        return out

    if method == "bonferroni":
        adjusted = pv * m
    elif method == "holm":
        adjusted = _holm(pv, m)
    elif method == "hochberg":
        adjusted = _step_up(pv, lambda rank: m - rank + 1.0)
    elif method in ("BH", "fdr"):
        adjusted = _step_up(pv, lambda rank: m / rank)
    elif method == "BY":
        harmonic = float(np.sum(1.0 / np.arange(1, m + 1)))
        adjusted = _step_up(pv, lambda rank: harmonic * m / rank)
    else:
        adjusted = _hommel(pv, m)

    out[valid] = np.clip(adjusted, 0.0, 1.0)
    return out


def _step_up(pv: NDArray, factor) -> NDArray:
    """Running minimum of p_(i) * factor(i), from the largest p down."""
    order = np.argsort(pv, kind="stable")[::-1]
    ranks = np.arange(len(pv), 0, -1, dtype=np.float64)
    scaled = np.minimum.accumulate(pv[order] * factor(ranks))
    out = np.empty_like(pv)
    out[order] = scaled
    return out


def _holm(pv: NDArray, m: int) -> NDArray:
    """Step-down: running maximum of p_(i) * (m - i + 1)."""
    order = np.argsort(pv, kind="stable")
    ranks = np.arange(1, len(pv) + 1, dtype=np.float64)
    scaled = np.maximum.accumulate(pv[order] * (m - ranks + 1.0))
    out = np.empty_like(pv)
    out[order] = scaled
    return out


def _hommel(pv: NDArray, m: int) -> NDArray:
    """
    Hommel's procedure, following the loop in stats::p.adjust.

    Missing tests (m > len(pv)) are padded with p = 1.
    """
    lp = len(pv)
    if lp == 1 and m == 1:
        return pv.copy()
    work = np.ones(m)
    work[:lp] = pv
    order = np.argsort(work, kind="stable")
    sp = work[order]

    i = np.arange(1, m + 1, dtype=np.float64)
    q = np.full(m, np.min(m * sp / i))
    pa = q.copy()
    for j in range(m - 1, 1, -1):
        head = m - j + 1          # R: ij = 1:(n-j+1)
        q1 = np.min(j * sp[head:] / np.arange(2, j + 1, dtype=np.float64))
        q[:head] = np.minimum(j * sp[:head], q1)
        q[head:] = q[head - 1]
        pa = np.maximum(pa, q)
    adjusted = np.maximum(pa, sp)

    out = np.empty(m)
    out[order] = adjusted
    return out[:lp]
