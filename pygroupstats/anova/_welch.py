"""
Heteroscedastic one-way F statistic on (trimmed) means.

Wilcox's t1way. With trim = 0 it is Welch's (1951) oneway.test statistic:

    h_j = n_j - 2 floor(tr n_j)
    d_j = (n_j - 1) s_wj^2 / (h_j (h_j - 1)),   w_j = 1 / d_j,   U = sum w_j
    X~  = sum w_j X_tj / U
    A   = sum w_j (X_tj - X~)^2 / (k - 1)
    S   = sum (1 - w_j / U)^2 / (h_j - 1)
    F   = A / (1 + 2 (k - 2) S / (k^2 - 1))
    df  = (k - 1, (k^2 - 1) / (3 S))

X_tj are trimmed means and s_wj^2 winsorized variances; at trim = 0 these are
the ordinary means and variances, so w_j = n_j / s_j^2.

Inputs may be 1-D group samples or (B, n_j) batches from the bootstrap.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.compute.robust import (
    trim_count,
    trimmed_mean,
    winsorized_variance,
)
from pygroupstats.core.exceptions import DegenerateGroupsError, InsufficientDataError


def effective_sizes(sizes: list[int], trim: float) -> NDArray[np.intp]:
    return np.array([n - 2 * trim_count(n, trim) for n in sizes])


def check_effective_sizes(
    levels: tuple[str, ...], sizes: list[int], trim: float, purpose: str,
) -> None:
    """Each group must keep h_j >= 2 observations after trimming."""
    for level, n, h in zip(levels, sizes, effective_sizes(sizes, trim)):
        if h < 2:
            raise InsufficientDataError(
                f"{purpose}: group {level!r} keeps {h} observation(s) after "
                f"trimming {trim} from each tail, needs at least 2",
                group=level, n=n, required=n - h + 2,
            )


def t1way_batch(
    samples: list[NDArray[np.floating[Any]]],
    trim: float,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    (F, d_j, df2) for every row of the batch.

    Returns F with shape (B,), d with shape (B, k) and df2 with shape (B,).
    Rows where some d_j == 0 have F = df2 = NaN.
    """
    k = len(samples)
    sizes = [s.shape[-1] for s in samples]
    h = effective_sizes(sizes, trim).astype(np.float64)
    n = np.array(sizes, dtype=np.float64)

    tm = np.stack([np.atleast_1d(trimmed_mean(s, trim)) for s in samples], axis=-1)
    wv = np.stack([np.atleast_1d(winsorized_variance(s, trim)) for s in samples], axis=-1)
    d = (n - 1.0) * wv / (h * (h - 1.0))

    with np.errstate(divide='ignore', invalid='ignore'):
        w = 1.0 / d
        u = np.sum(w, axis=-1, keepdims=True)
        xt = np.sum(w * tm, axis=-1, keepdims=True) / u
        a = np.sum(w * (tm - xt) ** 2, axis=-1) / (k - 1.0)
        s = np.sum((1.0 - w / u) ** 2 / (h - 1.0), axis=-1)
        f = a / (1.0 + 2.0 * (k - 2.0) * s / (k ** 2 - 1.0))
        df2 = (k ** 2 - 1.0) / (3.0 * s)

    bad = np.any(d <= 0, axis=-1)
    f = np.where(bad, np.nan, f)
    df2 = np.where(bad, np.nan, df2)
    return f, d, df2


def t1way_statistic(
    samples: list[NDArray[np.floating[Any]]],
    levels: tuple[str, ...],
    trim: float,
) -> tuple[float, float, float]:
    """
    Observed (F, df1, df2).

    Raises:
        DegenerateGroupsError: Some group has zero (winsorized) variance
    """
    f, d, df2 = t1way_batch(samples, trim)
    zero = tuple(level for level, dj in zip(levels, d[0]) if dj <= 0)
    if zero:
        what = "variance" if trim == 0 else "winsorized variance"
        raise DegenerateGroupsError(
            f"group(s) {list(zero)} have zero {what}; the heteroscedastic "
            f"weights n_j / s_j^2 are undefined",
            groups=zero,
        )
    return float(f[0]), float(len(samples) - 1), float(df2[0])
