"""
Trimmed and winsorized location / scale kernels.

Shared by the descriptive summarizer, the trimmed-means omnibus tests,
Yuen's test, the robust effect sizes and the bootstrap post-hoc test.

Conventions (matching R's mean(x, trim=) and Wilcox's WRS functions):
    g = floor(trim * n) observations are removed (trimmed mean) or clipped
    (winsorizing) in each tail. Winsorized variance uses the n-1 denominator.

Every kernel accepts a 1-D array or a 2-D batch where each row is one
sample (the layout the resampling engine produces); reductions run over the
last axis.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pygroupstats.core.exceptions import InsufficientDataError


def trim_count(n: int, trim: float) -> int:
    """Number of observations removed from EACH tail: floor(trim * n)."""
    return int(np.floor(trim * n))


def _check_trimmable(n: int, trim: float, name: str | None) -> int:
    g = trim_count(n, trim)
    if n - 2 * g < 1:
        label = f" {name!r}" if name is not None else ""
        raise InsufficientDataError(
            f"group{label}: trimming {trim} from each tail of {n} observations "
            f"leaves nothing to average",
            group=name, n=n, required=2 * g + 1,
        )
    return g


def trimmed_mean(
    x: NDArray[np.floating[Any]],
    trim: float,
    *,
    name: str | None = None,
) -> NDArray[np.floating[Any]] | float:
    """
    Mean after removing floor(trim * n) observations from each tail.

    Args:
        x: 1-D sample or (B, n) batch of samples
        trim: Proportion trimmed from each tail, 0 <= trim < 0.5
        name: Group label used in error messages

    Returns:
        float for 1-D input, (B,) array for batched input

    Raises:
        InsufficientDataError: If trimming would remove every observation
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.shape[-1]
    g = _check_trimmable(n, trim, name)
    if g == 0:
        out = np.mean(x, axis=-1)
    else:
        s = np.sort(x, axis=-1)
        out = np.mean(s[..., g:n - g], axis=-1)
    return float(out) if np.ndim(out) == 0 else out


def winsorize(x: NDArray[np.floating[Any]], trim: float) -> NDArray[np.floating[Any]]:
    """
    Clip each tail at the g-th order statistic, g = floor(trim * n).

    Returns a new array in the original observation order.
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.shape[-1]
    g = trim_count(n, trim)
    if g == 0:
        return x.copy()
    s = np.sort(x, axis=-1)
    lo = s[..., g:g + 1]
    hi = s[..., n - g - 1:n - g]
    return np.clip(x, lo, hi)


def winsorized_variance(
    x: NDArray[np.floating[Any]],
    trim: float,
) -> NDArray[np.floating[Any]] | float:
    """
    Sample variance (n-1 denominator) of the winsorized sample.

    Matches WRS winvar(). Needs at least two observations.
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.shape[-1]
    if n < 2:
        raise InsufficientDataError(
            f"winsorized variance needs at least 2 observations, got {n}",
            n=n, required=2,
        )
    w = winsorize(x, trim)
    out = np.var(w, axis=-1, ddof=1)
    return float(out) if np.ndim(out) == 0 else out


def normal_winsor_constant(trim: float) -> float:
    """
    Winsorized variance of the standard normal distribution.

    Dividing a winsorized variance by this constant gives a consistent
    estimate of sigma^2 under normality; its square root is the rescaling
    constant of the Algina-Keselman-Penfield robust d (0.642 at trim 0.2).

        c(tr) = integral_{z_tr}^{z_(1-tr)} z^2 phi(z) dz + 2 tr z_tr^2
    """
    if trim == 0:
        return 1.0
    b = float(sp_stats.norm.ppf(1.0 - trim))
    inner = (1.0 - 2.0 * trim) - 2.0 * b * float(sp_stats.norm.pdf(b))
    return inner + 2.0 * trim * b ** 2
