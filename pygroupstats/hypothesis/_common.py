"""
Common types for two-group and one-sample tests.

HTestParams maps to R's htest class so that every test in this package
prints and reads the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Attributes
    ----------
    statistic : float
        Test statistic value.
    statistic_name : str
        Name of the statistic ("t", "Ty", "D", "mean difference").
    parameter : dict or None
        Distribution parameters, e.g. {"df": 7.6}. None for resampling-only
        statistics.
    p_value : float
        p-value of the test, in [0, 1].
    conf_int : ndarray or None
        Confidence interval, shape (2,). None if not computed.
    conf_level : float
        Confidence level (e.g. 0.95).
    estimate : dict or None
        Point estimate(s), e.g. {"mean of a": 5.1, "mean of b": 3.2}.
    null_value : dict or None
        Hypothesized value under H0, e.g. {"difference in means": 0}.
    alternative : str
        "two.sided", "less", or "greater".
    method : str
        Human-readable method name, e.g. "Welch Two Sample t-test".
    data_name : str
        Description of the data, e.g. "y by group (a, b)".
    extras : dict or None
        Test-specific outputs (effect size, permutation mode, resample
        counts).
    """
    statistic: float
    statistic_name: str
    parameter: dict[str, float] | None
    p_value: float
    conf_int: NDArray[np.floating[Any]] | None
    conf_level: float
    estimate: dict[str, float] | None
    null_value: dict[str, float] | None
    alternative: str
    method: str
    data_name: str
    extras: dict[str, Any] | None = None
