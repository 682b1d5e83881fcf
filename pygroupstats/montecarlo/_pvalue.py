"""
Tail counting for resampling null distributions.

Monte Carlo p-values use the Phipson-Smyth correction (count + 1)/(R + 1),
which keeps them in [1/(R+1), 1]. Exact enumeration uses count / total.

Comparisons allow a relative tolerance so that permuted statistics that equal
the observed one up to floating-point rounding are counted as ties.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

_REL_TOL = 1e-9


def _tol(observed: float) -> float:
    return _REL_TOL * max(1.0, abs(observed))


def tail_count(
    null_stats: NDArray[np.floating[Any]],
    observed: float,
    alternative: str,
) -> int:
    """
    Count null statistics at least as extreme as `observed`.

    two.sided compares absolute values (the statistic must be centred at 0
    under H0); greater / less count the right / left tail.
    """
    tol = _tol(observed)
    if alternative == "two.sided":
        hits = np.abs(null_stats) >= abs(observed) - tol
    elif alternative == "greater":
        hits = null_stats >= observed - tol
    elif alternative == "less":
        hits = null_stats <= observed + tol
    else:
        raise ValueError(f"Unknown alternative: {alternative!r}")
    return int(np.sum(hits))


def monte_carlo_p_value(
    null_stats: NDArray[np.floating[Any]],
    observed: float,
    alternative: str,
) -> float:
    """(count + 1) / (R + 1) over R resampled statistics."""
    R = len(null_stats)
    count = tail_count(null_stats, observed, alternative)
    return float(count + 1) / float(R + 1)


def exact_p_value(
    null_stats: NDArray[np.floating[Any]],
    observed: float,
    alternative: str,
) -> float:
    """count / total over the complete permutation distribution."""
    count = tail_count(null_stats, observed, alternative)
    return min(1.0, float(count) / float(len(null_stats)))
