"""
Moment-based shape statistics for one sample.

With m_r = sum((x - mean)^r) / n, g1 = m3 / m2^1.5 and g2 = m4 / m2^2 - 3:

    type 1:  g1, g2                                  (textbook moments)
    type 2:  G1 = g1 * sqrt(n(n-1)) / (n-2)           (SAS / SPSS, e1071 type 2)
             G2 = ((n-1)/((n-2)(n-3))) * ((n+1) g2 + 6)
    type 3:  b1 = g1 * ((n-1)/n)^1.5                  (psych / MINITAB default)
             b2 = (g2 + 3) * ((n-1)/n)^2 - 3

All kurtosis values are excess kurtosis. A constant sample, or a type 2
request with too few observations (n < 3 for skewness, n < 4 for kurtosis),
yields NaN; the caller records why.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.exceptions import InvalidConfigurationError

VALID_SKEW_TYPES = (1, 2, 3)


def check_skew_type(skew_type: int) -> int:
    if skew_type not in VALID_SKEW_TYPES:
        raise InvalidConfigurationError(
            f"skew_type: must be one of {VALID_SKEW_TYPES}, got {skew_type!r}",
            parameter="skew_type", value=skew_type,
        )
    return skew_type


def _central_moments(x: NDArray[np.floating[Any]]) -> tuple[float, float, float]:
    diffs = x - np.mean(x)
    n = len(x)
    m2 = float(np.sum(diffs ** 2) / n)
    m3 = float(np.sum(diffs ** 3) / n)
    m4 = float(np.sum(diffs ** 4) / n)
    return m2, m3, m4


def skewness(x: NDArray[np.floating[Any]], skew_type: int = 3) -> float:
    """Sample skewness of the requested type."""
    n = len(x)
    m2, m3, _ = _central_moments(x)
    if m2 == 0:
        return float('nan')
    g1 = m3 / m2 ** 1.5
    if skew_type == 1:
        return g1
    if skew_type == 2:
        if n < 3:
            return float('nan')
        return g1 * np.sqrt(n * (n - 1.0)) / (n - 2.0)
    return g1 * ((n - 1.0) / n) ** 1.5


def kurtosis(x: NDArray[np.floating[Any]], skew_type: int = 3) -> float:
    """Sample excess kurtosis of the requested type."""
    n = len(x)
    m2, _, m4 = _central_moments(x)
    if m2 == 0:
        return float('nan')
    g2 = m4 / m2 ** 2 - 3.0
    if skew_type == 1:
        return g2
    if skew_type == 2:
        if n < 4:
            return float('nan')
        return ((n - 1.0) / ((n - 2.0) * (n - 3.0))) * ((n + 1.0) * g2 + 6.0)
    return (g2 + 3.0) * ((n - 1.0) / n) ** 2 - 3.0
