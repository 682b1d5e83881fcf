"""
Effect size estimators.

Public API:
    omega_squared(y, group, ...) -> EffectSizeSolution
    omega_squared_from_f(f, df1, df2, ...) -> EffectSizeSolution
    cohens_d(y, group, ...) -> EffectSizeSolution
    robust_cohens_d(y, group, ...) -> EffectSizeSolution
    explanatory_effect(y, group, ...) -> EffectSizeSolution
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pygroupstats.core.compute.oneway import fit_oneway
from pygroupstats.core.compute.timing import Timer
from pygroupstats.core.defaults import DEFAULT_N_BOOT, DEFAULT_ROBUST_TRIM
from pygroupstats.core.exceptions import NumericalError
from pygroupstats.core.result import Result
from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.core.validation import check_conf_level, check_resamples, check_trim
from pygroupstats.effectsize._cohen import cohens_d_conf_int, cohens_d_value
from pygroupstats.effectsize._common import make_effect_size
from pygroupstats.effectsize._omega import omega_squared_f, omega_squared_from_fit
from pygroupstats.effectsize._robust import akp_d_batch, akp_d_value, explanatory_xi
from pygroupstats.effectsize._rules import InterpretationRules
from pygroupstats.effectsize.solution import EffectSizeSolution
from pygroupstats.montecarlo import bootstrap_indices, replicate, resolve_seed

RulesArg = str | InterpretationRules | None


def omega_squared(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    rules: RulesArg = "field2013",
) -> EffectSizeSolution:
    """
    Omega-squared for a one-way design.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        levels: Optional subset / order of groups
        rules: Interpretation rule set name or object; None for no label

    Returns:
        EffectSizeSolution with 0 <= estimate <= 1

    Raises:
        InvalidGroupCountError: Fewer than 2 groups
        DegenerateGroupsError: Every observation identical
    """
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    fit = fit_oneway(sample.y, sample.codes, sample.levels)
    value = omega_squared_from_fit(fit)
    es = make_effect_size('omega_squared', value, rules, 'omega_squared')

    timer.stop()
    return EffectSizeSolution(_result=Result(
        params=es,
        info={'n': sample.n, 'k': sample.n_groups, 'levels': sample.levels},
        timing=timer.result(),
        backend_name='cpu_omega_squared',
    ))


def omega_squared_from_f(
    f_value: float,
    df1: float,
    df2: float,
    *,
    rules: RulesArg = "field2013",
) -> EffectSizeSolution:
    """
    Omega-squared recovered from a reported F statistic.

    omega^2 = (F - 1) df1 / (F df1 + df2 + 1), clipped at 0. Matches
    effectsize::F_to_omega2 for one-way designs.
    """
    value = omega_squared_f(f_value, df1, df2)
    es = make_effect_size('omega_squared', value, rules, 'omega_squared')
    return EffectSizeSolution(_result=Result(
        params=es,
        info={'f_value': float(f_value), 'df1': float(df1), 'df2': float(df2)},
        timing=None,
        backend_name='cpu_omega_squared_f',
    ))


def cohens_d(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    conf_level: float = 0.95,
    rules: RulesArg = "cohen1988",
) -> EffectSizeSolution:
    """
    Cohen's d for two independent groups (first level minus second).

    d uses the pooled standard deviation with (n - 1) weights; its interval
    inverts the noncentral t distribution.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels
        levels: The two groups to compare, in order; required when the
            sample holds more than two groups
        conf_level: Interval level
        rules: Interpretation rule set

    Raises:
        InvalidGroupCountError: Unless exactly two groups remain
        InsufficientDataError: A group has fewer than 2 observations
        DegenerateGroupsError: Both groups are constant
    """
    conf_level = check_conf_level(conf_level)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    x1, x2 = sample.two_groups("cohens_d")
    d = cohens_d_value(x1, x2, labels=sample.levels)
    notes: list[str] = []
    with timer.section('conf_int'):
        ci = cohens_d_conf_int(d, len(x1), len(x2), conf_level, notes)
    es = make_effect_size('cohens_d', d, rules, 'd', ci, conf_level)

    timer.stop()
    return EffectSizeSolution(_result=Result(
        params=es,
        info={'levels': sample.levels, 'n1': len(x1), 'n2': len(x2)},
        timing=timer.result(),
        backend_name='cpu_cohens_d',
        warnings=tuple(notes),
    ))


def robust_cohens_d(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    trim: float = DEFAULT_ROBUST_TRIM,
    n_boot: int = DEFAULT_N_BOOT,
    conf_level: float = 0.95,
    seed: int | None = None,
    n_workers: int = 1,
    rules: RulesArg = "cohen1988",
) -> EffectSizeSolution:
    """
    Algina-Keselman-Penfield robust d with a percentile bootstrap interval.

    Matches WRS2::akp.effect. Bootstrap resamples whose pooled winsorized
    variance is 0 are dropped; the effective count is in info['n_boot_effective'].

    Args:
        y: Responses, or a GroupedSample
        group: Group labels
        levels: The two groups to compare, in order
        trim: Trimming / winsorizing proportion per tail
        n_boot: Bootstrap resamples for the interval
        conf_level: Interval level
        seed: Seed for the bootstrap
        n_workers: Threads for the bootstrap (output does not depend on it)
        rules: Interpretation rule set (d family)
    """
    trim = check_trim(trim)
    conf_level = check_conf_level(conf_level)
    warn_list: list[str] = []
    n_boot = check_resamples(n_boot, "n_boot", warn_list)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    x1, x2 = sample.two_groups("robust_cohens_d")
    d = akp_d_value(x1, x2, trim, labels=sample.levels)

    n1, n2 = len(x1), len(x2)

    def kernel(rng: np.random.Generator, size: int) -> np.ndarray:
        b1 = x1[bootstrap_indices(rng, size, n1)]
        b2 = x2[bootstrap_indices(rng, size, n2)]
        return akp_d_batch(b1, b2, trim)

    with timer.section('bootstrap'):
        boot = replicate(kernel, n_boot, seed=seed, n_workers=n_workers)
    boot = boot[~np.isnan(boot)]
    if len(boot) == 0:
        raise NumericalError(
            "robust_cohens_d: every bootstrap resample had zero winsorized variance"
        )
    alpha = 1.0 - conf_level
    lo, hi = np.quantile(boot, [alpha / 2.0, 1.0 - alpha / 2.0])
    es = make_effect_size('akp_robust_d', d, rules, 'd', (float(lo), float(hi)), conf_level)

    timer.stop()
    return EffectSizeSolution(_result=Result(
        params=es,
        info={
            'levels': sample.levels,
            'trim': trim,
            'n_boot': n_boot,
            'n_boot_effective': int(len(boot)),
            'seed': seed,
        },
        timing=timer.result(),
        backend_name='cpu_akp_effect',
        warnings=tuple(warn_list),
    ))


def explanatory_effect(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
    trim: float = DEFAULT_ROBUST_TRIM,
    seed: int | None = None,
) -> EffectSizeSolution:
    """
    Wilcox & Tian's explanatory measure of effect size, xi.

    With unequal group sizes xi^2 is averaged over equal-size subsamples
    drawn with `seed`; with equal sizes the result is deterministic.
    Works for two or more groups. Not interpreted by the d-family rules.
    """
    trim = check_trim(trim)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    sample.require_min_size(2, "explanatory_effect")
    rng = np.random.default_rng(resolve_seed(seed))
    xi = explanatory_xi(list(sample.groups().values()), trim, rng, labels=sample.levels)
    es = make_effect_size('explanatory_xi', xi, None, 'd')

    timer.stop()
    return EffectSizeSolution(_result=Result(
        params=es,
        info={'levels': sample.levels, 'trim': trim, 'seed': seed},
        timing=timer.result(),
        backend_name='cpu_explanatory_xi',
    ))
