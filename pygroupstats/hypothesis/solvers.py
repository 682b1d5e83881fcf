"""
Solver dispatch for two-group and one-sample tests.

Provides R-named functions: welch_t_test(), permutation_t_test(),
yuen_test(), lillie_test().

Also re-exports p_adjust() for convenience.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from numpy.typing import ArrayLike

from pygroupstats.core.defaults import (
    DEFAULT_EXACT_LIMIT,
    DEFAULT_N_PERM_TWO_SAMPLE,
    DEFAULT_ROBUST_TRIM,
)
from pygroupstats.core.sample import GroupedSample
from pygroupstats.hypothesis._p_adjust import p_adjust  # re-export
from pygroupstats.hypothesis.backends.cpu import CPUHypothesisBackend
from pygroupstats.hypothesis.design import HypothesisDesign
from pygroupstats.hypothesis.solution import HTestSolution

Alternative = Literal["two.sided", "less", "greater"]


def _solve(design: HypothesisDesign) -> HTestSolution:
    result = CPUHypothesisBackend().solve(design)
    return HTestSolution(_result=result, _design=design)


def welch_t_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    alternative: Alternative = "two.sided",
    mu: float = 0.0,
    conf_level: float = 0.95,
    var_equal: bool = False,
) -> HTestSolution:
    """
    Two-sample t-test. Matches R t.test(y ~ group).

    Parameters
    ----------
    y : array-like or GroupedSample
        Responses.
    group : array-like or None
        Group labels; exactly two groups after `levels` filtering.
    levels : sequence or None
        The two groups to compare, in order (difference = first - second).
    alternative : str
        "two.sided" (default), "less", or "greater".
    mu : float
        Hypothesized difference in means.
    conf_level : float
        Confidence level for the interval.
    var_equal : bool
        Pool the variances (Student's t). Default False: Welch's test.

    Returns
    -------
    HTestSolution
        With Cohen's d attached as effect_size.

    Raises
    ------
    InvalidGroupCountError
        Unless exactly two groups remain.
    DegenerateGroupsError
        If both groups are constant.
    """
    design = HypothesisDesign.for_t_test(
        y, group,
        levels=levels,
        alternative=alternative,
        mu=mu,
        conf_level=conf_level,
        var_equal=var_equal,
    )
    return _solve(design)


def permutation_t_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    alternative: Alternative = "two.sided",
    distribution: Literal["auto", "exact", "monte_carlo"] = "auto",
    n_perm: int = DEFAULT_N_PERM_TWO_SAMPLE,
    exact_limit: int = DEFAULT_EXACT_LIMIT,
    seed: int | None = None,
    n_workers: int = 1,
) -> HTestSolution:
    """
    Two-sample permutation test of the difference in means.

    Like coin::oneway_test with distribution = "exact" / "approximate".

    Parameters
    ----------
    distribution : str
        "auto" (default) enumerates every label assignment when there are
        at most `exact_limit`, otherwise draws `n_perm` random ones.
        "exact" / "monte_carlo" force one mode.
    n_perm : int
        Monte Carlo permutations. Default 10000.
    seed : int or None
        Seed for the Monte Carlo permutations.
    n_workers : int
        Threads for the Monte Carlo permutations; does not change results.

    Returns
    -------
    HTestSolution
        `mode` is "exact" or "monte_carlo"; `df` is None.
    """
    design = HypothesisDesign.for_permutation_test(
        y, group,
        levels=levels,
        alternative=alternative,
        distribution=distribution,
        n_perm=n_perm,
        exact_limit=exact_limit,
        seed=seed,
        n_workers=n_workers,
    )
    return _solve(design)


def yuen_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    trim: float = DEFAULT_ROBUST_TRIM,
    alternative: Alternative = "two.sided",
    conf_level: float = 0.95,
    n_boot: int | None = None,
    side: bool = True,
    seed: int | None = None,
    n_workers: int = 1,
) -> HTestSolution:
    """
    Yuen's test for trimmed means. Matches WRS2::yuen / WRS2::yuenbt.

    Parameters
    ----------
    trim : float
        Proportion trimmed from each tail. Default 0.2.
    n_boot : int or None
        None (default): analytic t reference distribution. Otherwise the
        number of bootstrap-t resamples.
    side : bool
        Bootstrap only. True: symmetric interval and p-value from |T*|.
        False: equal-tailed interval.
    seed : int or None
        Seed for the bootstrap and the explanatory effect size subsampling.

    Returns
    -------
    HTestSolution
        With the explanatory measure xi attached as effect_size.
    """
    design = HypothesisDesign.for_yuen_test(
        y, group,
        levels=levels,
        trim=trim,
        alternative=alternative,
        conf_level=conf_level,
        n_boot=n_boot,
        side=side,
        seed=seed,
        n_workers=n_workers,
    )
    return _solve(design)


def lillie_test(x: ArrayLike, *, data_name: str = "x") -> HTestSolution:
    """
    Lilliefors normality test. Matches nortest::lillie.test().

    Needs at least 5 observations.
    """
    return _solve(HypothesisDesign.for_lillie_test(x, data_name=data_name))


__all__ = [
    "welch_t_test",
    "permutation_t_test",
    "yuen_test",
    "lillie_test",
    "p_adjust",
]
