"""
Cohen's d for two independent groups.

d = (mean1 - mean2) / s_pooled,
s_pooled^2 = ((n1 - 1) s1^2 + (n2 - 1) s2^2) / (n1 + n2 - 2)

Confidence interval by inverting the noncentral t distribution of
t = d * sqrt(n1 n2 / (n1 + n2)) on n1 + n2 - 2 df (effectsize::cohens_d),
with the Hedges-Olkin normal interval when that inversion fails.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats
from scipy.optimize import brentq

from pygroupstats.core.exceptions import DegenerateGroupsError, NumericalError


def pooled_sd(x1: NDArray[np.floating[Any]], x2: NDArray[np.floating[Any]]) -> float:
    n1, n2 = len(x1), len(x2)
    v1 = np.var(x1, ddof=1)
    v2 = np.var(x2, ddof=1)
    return float(np.sqrt(((n1 - 1) * v1 + (n2 - 1) * v2) / (n1 + n2 - 2)))


def cohens_d_value(
    x1: NDArray[np.floating[Any]],
    x2: NDArray[np.floating[Any]],
    labels: tuple[str, str] = ("1", "2"),
) -> float:
    """Point estimate of d, group 1 minus group 2."""
    sd = pooled_sd(x1, x2)
    if sd == 0.0:
        raise DegenerateGroupsError(
            "Cohen's d: pooled standard deviation is 0 (both groups constant)",
            groups=labels,
        )
    return float((np.mean(x1) - np.mean(x2)) / sd)


def _ncp_bound(t_obs: float, df: float, target: float) -> float | None:
    """
    Noncentrality lambda with P(T <= t_obs | lambda) == target.

    Returns None when no sign change is found, which happens for very large
    |t| where the noncentral t CDF loses precision.
    """

    def f(ncp: float) -> float:
        return float(sp_stats.nct.cdf(t_obs, df, ncp)) - target

    # f is decreasing in ncp; widen the bracket geometrically until it changes sign
    step = max(5.0, abs(t_obs))
    lo, hi = t_obs - step, t_obs + step
    f_lo, f_hi = f(lo), f(hi)
    for _ in range(60):
        if f_lo >= 0:
            break
        step *= 2.0
        lo = t_obs - step
        f_lo = f(lo)
    step = max(5.0, abs(t_obs))
    for _ in range(60):
        if f_hi <= 0:
            break
        step *= 2.0
        hi = t_obs + step
        f_hi = f(hi)
    if not (np.isfinite(f_lo) and np.isfinite(f_hi) and f_lo >= 0 >= f_hi):
        return None
    return float(brentq(f, lo, hi, xtol=1e-10))


def _normal_conf_int(d: float, n1: int, n2: int, conf_level: float) -> tuple[float, float]:
    # Hedges & Olkin (1985) large-sample variance of d
    se = np.sqrt((n1 + n2) / (n1 * n2) + d ** 2 / (2.0 * (n1 + n2)))
    z = sp_stats.norm.ppf(1.0 - (1.0 - conf_level) / 2.0)
    return float(d - z * se), float(d + z * se)


def cohens_d_conf_int(
    d: float,
    n1: int,
    n2: int,
    conf_level: float,
    notes: list[str] | None = None,
) -> tuple[float, float]:
    """
    Noncentral-t confidence interval for d.

    Falls back to the normal approximation (noted in `notes`) when the
    noncentrality parameter cannot be bracketed.

    Raises:
        NumericalError: d is not finite, so no interval exists
    """
    if not np.isfinite(d):
        raise NumericalError(f"Cohen's d interval: estimate is not finite ({d})")
    alpha = 1.0 - conf_level
    scale = np.sqrt(n1 * n2 / (n1 + n2))
    t_obs = d * scale
    df = n1 + n2 - 2
    lam_lo = _ncp_bound(t_obs, df, 1.0 - alpha / 2.0)
    lam_hi = _ncp_bound(t_obs, df, alpha / 2.0)
    if lam_lo is None or lam_hi is None:
        if notes is not None:
            notes.append(
                f"Cohen's d interval uses the normal approximation; the noncentral t "
                f"could not be inverted at t={t_obs:.4g}, df={df}"
            )
        return _normal_conf_int(d, n1, n2, conf_level)
    return float(lam_lo / scale), float(lam_hi / scale)
