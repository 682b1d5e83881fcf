"""
Solver dispatch for assumption diagnostics.

Public API:
    normality_test(y, group) -> HTestSolution      # Lilliefors on residuals
    homogeneity_test(y, group, center=...) -> LeveneSolution
    check_assumptions(y, group) -> AssumptionReport
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pygroupstats.anova._levene import levene_test_impl
from pygroupstats.anova.solution import LeveneSolution
from pygroupstats.core.compute.timing import Timer
from pygroupstats.core.defaults import DEGENERATE_REL_TOL
from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InsufficientDataError,
    InvalidConfigurationError,
)
from pygroupstats.core.result import Result
from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.diagnostics._residuals import residuals
from pygroupstats.diagnostics.solution import AssumptionReport
from pygroupstats.hypothesis.solution import HTestSolution
from pygroupstats.hypothesis.solvers import lillie_test


def normality_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
) -> HTestSolution:
    """
    Lilliefors test of the pooled residuals of the group-mean model.

    Raises:
        InsufficientDataError: Fewer than 5 residuals
        DegenerateGroupsError: Every residual is 0
    """
    res = residuals(y, group, levels=levels)
    # Constant groups leave rounding-level residuals, judged against the means
    magnitude = max(1.0, max(abs(m) for m in res.group_means.values()))
    if np.max(np.abs(res.residuals)) <= DEGENERATE_REL_TOL * magnitude:
        raise DegenerateGroupsError(
            "normality_test: every group is constant, residuals are all 0",
            groups=tuple(res.group_means),
        )
    return lillie_test(res.residuals, data_name="residuals of y by group")


def homogeneity_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    center: str = 'median',
    levels: Sequence[Any] | None = None,
) -> LeveneSolution:
    """
    Test of homogeneity of variances across groups.

    With center='median' (default) this is the Brown-Forsythe test, which
    holds up under non-normality; center='mean' gives Levene's original test.
    Matches car::leveneTest().

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        center: 'median' or 'mean'
        levels: Optional subset / order of groups

    Returns:
        LeveneSolution with F statistic, p-value, and group variances

    Examples:
        >>> result = homogeneity_test(y, group)
        >>> result.p_value > 0.05  # no evidence against equal variances
        >>> print(result.summary())
    """
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    sample.require_min_size(2, "homogeneity_test")
    with timer.section('levene'):
        params = levene_test_impl(sample, center=center)

    timer.stop()
    return LeveneSolution(_result=Result(
        params=params,
        info={'center': center, 'n': sample.n},
        timing=timer.result(),
        backend_name='cpu_levene',
    ))


def check_assumptions(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    alpha: float = 0.05,
    center: str = 'median',
    levels: Sequence[Any] | None = None,
) -> AssumptionReport:
    """
    Run the normality and equal-variance checks and suggest an omnibus method.

    A failed assumption, or a check that cannot run on this sample, is
    reported in the returned object rather than raised.

    Raises:
        InvalidConfigurationError: alpha outside (0, 1) or unknown center
        InvalidGroupCountError: Fewer than 2 groups
    """
    if not (0.0 < alpha < 1.0):
        raise InvalidConfigurationError(
            f"alpha: must be in (0, 1), got {alpha}", parameter="alpha", value=alpha,
        )
    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    notes: list[str] = []

    try:
        normality = normality_test(sample)
    except (InsufficientDataError, DegenerateGroupsError) as e:
        normality = None
        notes.append(f"normality not checked: {e}")

    try:
        homogeneity = homogeneity_test(sample, center=center)
    except (InsufficientDataError, DegenerateGroupsError) as e:
        homogeneity = None
        notes.append(f"equal variances not checked: {e}")

    if normality is not None:
        notes.extend(normality.warnings)
    non_normal = normality is not None and normality.p_value < alpha
    unequal = homogeneity is not None and homogeneity.p_value < alpha

    if non_normal:
        method = 'trimmed_bootstrap'
        notes.append(
            "residuals depart from normality; a trimmed-means or permutation "
            "test is less sensitive to this"
        )
    else:
        method = 'welch'
    if unequal:
        notes.append(
            "group variances differ; prefer a heteroscedastic method over 'classic'"
        )
    elif homogeneity is not None and not non_normal:
        notes.append("no evidence against equal variances; 'classic' is also defensible")

    return AssumptionReport(
        normality=normality,
        homogeneity=homogeneity,
        alpha=float(alpha),
        recommended_method=method,
        notes=tuple(notes),
    )
