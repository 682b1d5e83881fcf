"""
Per-group descriptive statistics.

Public API:
    describe_groups(y, group, ...) -> DescribeSolution
    trimmed_mean(x, trim) -> float
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pygroupstats.core.compute import robust
from pygroupstats.core.compute.timing import Timer
from pygroupstats.core.defaults import DEFAULT_DESCRIBE_TRIM, MAD_CONSTANT
from pygroupstats.core.result import Result
from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.core.validation import check_1d, check_array, check_finite, check_trim
from pygroupstats.descriptive._common import DescribeParams, GroupSummary
from pygroupstats.descriptive._moments import check_skew_type, kurtosis, skewness
from pygroupstats.descriptive.solution import DescribeSolution


def trimmed_mean(x: ArrayLike, trim: float = DEFAULT_DESCRIBE_TRIM) -> float:
    """
    Mean after dropping floor(n * trim) observations from each tail.

    Matches R's mean(x, trim=). trim=0 is the ordinary mean.

    Raises:
        InvalidConfigurationError: Unless 0 <= trim < 0.5
        InsufficientDataError: If trimming leaves no observations
    """
    trim = check_trim(trim)
    arr = check_array(x, "x")
    check_1d(arr, "x")
    check_finite(arr, "x")
    return robust.trimmed_mean(arr, trim)


def describe_groups(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    trim: float = DEFAULT_DESCRIBE_TRIM,
    skew_type: int = 3,
    levels: Sequence[Any] | None = None,
) -> DescribeSolution:
    """
    Summary statistics for every group, like psych::describeBy.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        trim: Proportion trimmed from each tail for the trimmed mean
        skew_type: 1 (g1, g2), 2 (G1, G2) or 3 (b1, b2, default)
        levels: Optional subset / order of groups

    Returns:
        DescribeSolution with one GroupSummary per group, in level order

    Raises:
        InsufficientDataError: A group has fewer than 2 observations, or
            trimming would remove all of a group
        InvalidConfigurationError: Bad trim or skew_type

    Examples:
        >>> res = describe_groups(scores, region, trim=0.2)
        >>> res['north'].trimmed_mean
        >>> print(res.summary())
    """
    trim = check_trim(trim)
    skew_type = check_skew_type(skew_type)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_min_size(2, "describe_groups (sd needs n >= 2)")

    warn_list: list[str] = []
    rows: list[GroupSummary] = []
    for level, x in sample.groups().items():
        n = len(x)
        var = float(np.var(x, ddof=1))
        sd = float(np.sqrt(var))
        med = float(np.median(x))
        skew = float(skewness(x, skew_type))
        kurt = float(kurtosis(x, skew_type))
        if var == 0:
            warn_list.append(
                f"group {level!r} has zero variance; skewness and kurtosis are NaN"
            )
        elif np.isnan(skew) or np.isnan(kurt):
            warn_list.append(
                f"group {level!r}: n={n} is too small for type {skew_type} "
                f"skewness/kurtosis; reported as NaN"
            )
        rows.append(GroupSummary(
            group=level,
            n=n,
            mean=float(np.mean(x)),
            trimmed_mean=robust.trimmed_mean(x, trim, name=level),
            trim=trim,
            median=med,
            sd=sd,
            variance=var,
            se=sd / np.sqrt(n),
            mad=MAD_CONSTANT * float(np.median(np.abs(x - med))),
            min=float(np.min(x)),
            max=float(np.max(x)),
            range=float(np.max(x) - np.min(x)),
            skewness=skew,
            kurtosis=kurt,
        ))

    for msg in warn_list:
        warnings.warn(msg, RuntimeWarning, stacklevel=2)

    timer.stop()
    result = Result(
        params=DescribeParams(groups=tuple(rows), trim=trim, skew_type=skew_type),
        info={'n': sample.n, 'levels': sample.levels},
        timing=timer.result(),
        backend_name='cpu_describe',
        warnings=tuple(warn_list),
    )
    return DescribeSolution(_result=result)
