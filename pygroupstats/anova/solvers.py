"""
Solver dispatch for tests of group means.

Public API:
    oneway_test(y, group, method=...) -> OmnibusSolution
    welch_anova / classic_anova / permutation_anova /
        trimmed_anova / trimmed_anova_bootstrap -> OmnibusSolution
    contrast_test(y, group, contrasts, ...) -> ContrastSolution
    pairwise_test(y, group, method=..., p_adjust='fdr') -> PostHocSolution
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import ArrayLike
from scipy import stats as sp_stats

from pygroupstats.anova._common import (
    ContrastParams,
    ContrastResult,
    OmnibusParams,
    PostHocParams,
)
from pygroupstats.anova._contrasts import (
    ContrastSpec,
    are_orthogonal,
    contrast_kernel,
    direction_matches,
)
from pygroupstats.anova._permutation import permutation_p_value
from pygroupstats.anova._posthoc import bootstrap_pairwise, games_howell, pairwise_t
from pygroupstats.anova._robust import t1waybt_p_value
from pygroupstats.anova._welch import check_effective_sizes, t1way_statistic
from pygroupstats.anova.solution import ContrastSolution, OmnibusSolution, PostHocSolution
from pygroupstats.core.compute.oneway import OneWayFit, fit_oneway
from pygroupstats.core.compute.robust import trimmed_mean
from pygroupstats.core.compute.timing import Timer
from pygroupstats.core.defaults import DEFAULT_N_BOOT, DEFAULT_N_PERM, DEFAULT_ROBUST_TRIM
from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InsufficientDataError,
    InvalidConfigurationError,
)
from pygroupstats.core.result import Result
from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.core.validation import (
    check_alternative,
    check_conf_level,
    check_resamples,
    check_trim,
)
from pygroupstats.effectsize._common import make_effect_size
from pygroupstats.effectsize._omega import omega_squared_from_fit
from pygroupstats.effectsize._robust import explanatory_xi
from pygroupstats.hypothesis._p_adjust import check_p_adjust_method, p_adjust as _adjust
from pygroupstats.hypothesis.backends._t_test import t_conf_int, t_pvalue
from pygroupstats.montecarlo import resolve_seed


class OmnibusMethod(str, Enum):
    """Omnibus strategies accepted by oneway_test()."""
    WELCH = "welch"
    CLASSIC = "classic"
    PERMUTATION = "permutation"
    TRIMMED = "trimmed"
    TRIMMED_BOOTSTRAP = "trimmed_bootstrap"


class PostHocMethod(str, Enum):
    """Base tests accepted by pairwise_test()."""
    GAMES_HOWELL = "games_howell"
    WELCH_T = "welch_t"
    BOOTSTRAP = "bootstrap"


def _coerce_enum(value: Any, enum_cls: type[Enum], parameter: str) -> Enum:
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = [m.value for m in enum_cls]
        raise InvalidConfigurationError(
            f"{parameter}: must be one of {choices}, got {value!r}",
            parameter=parameter, value=value,
        ) from e


def _omnibus_sample(
    y: ArrayLike | GroupedSample, group: ArrayLike | None, levels: Sequence[Any] | None,
) -> GroupedSample:
    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    sample.require_min_size(2, "oneway_test")
    return sample


# =====================================================================
# Omnibus
# =====================================================================


def oneway_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    method: OmnibusMethod | str = OmnibusMethod.WELCH,
    levels: Sequence[Any] | None = None,
    trim: float = DEFAULT_ROBUST_TRIM,
    n_perm: int = DEFAULT_N_PERM,
    n_boot: int = DEFAULT_N_BOOT,
    seed: int | None = None,
    n_workers: int = 1,
    rules: str | None = "field2013",
) -> OmnibusSolution:
    """
    Test equality of group locations across a single factor.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        method: 'welch' (default, oneway.test), 'classic' (equal-variance F),
            'permutation' (label shuffling), 'trimmed' (WRS2::t1way) or
            'trimmed_bootstrap' (WRS2::t1waybt)
        levels: Optional subset / order of groups
        trim: Trimming proportion for the trimmed methods
        n_perm: Permutations for 'permutation'
        n_boot: Bootstrap resamples for 'trimmed_bootstrap'
        seed: Seed for the resampling methods
        n_workers: Threads for the resampling methods; does not change results
        rules: Interpretation rule set for omega-squared

    Returns:
        OmnibusSolution with statistic, df, p-value and omega-squared

    Raises:
        InvalidGroupCountError: Fewer than 2 groups
        InsufficientDataError: A group has fewer than 2 observations, or
            trimming leaves fewer than 2
        DegenerateGroupsError: A weighting formula meets a zero-variance group

    Examples:
        >>> res = oneway_test(score, region)
        >>> res.p_value, res.effect_size.estimate
        >>> oneway_test(score, region, method='permutation', seed=1)
    """
    method = _coerce_enum(method, OmnibusMethod, "method")
    timer = Timer()
    timer.start()

    sample = _omnibus_sample(y, group, levels)
    fit = fit_oneway(sample.y, sample.codes, sample.levels)
    samples = list(sample.groups().values())
    sizes = [len(s) for s in samples]
    warn_list: list[str] = []
    n_resamples = n_effective = None
    robust_effect = None
    used_trim: float | None = None
    locations = dict(zip(sample.levels, (float(m) for m in fit.means)))

    with timer.section('statistic'):
        if method is OmnibusMethod.WELCH:
            stat, df1, df2 = t1way_statistic(samples, sample.levels, 0.0)
            p_value = float(sp_stats.f.sf(stat, df1, df2))
            stat_name = "F"

        elif method in (OmnibusMethod.CLASSIC, OmnibusMethod.PERMUTATION):
            stat, df1, df2 = _classic_f(fit)
            p_value = float(sp_stats.f.sf(stat, df1, df2))
            stat_name = "F"

        else:
            used_trim = check_trim(trim)
            check_effective_sizes(sample.levels, sizes, used_trim, method.value)
            stat, df1, df2 = t1way_statistic(samples, sample.levels, used_trim)
            p_value = float(sp_stats.f.sf(stat, df1, df2))
            stat_name = "Ft"
            locations = {
                level: trimmed_mean(s, used_trim, name=level)
                for level, s in zip(sample.levels, samples)
            }

    if method is OmnibusMethod.PERMUTATION:
        n_resamples = check_resamples(n_perm, "n_perm", warn_list)
        with timer.section('permutations'):
            p_value, n_effective = permutation_p_value(
                sample.y, sample.codes, sample.n_groups, n_resamples,
                seed=seed, n_workers=n_workers,
            )

    elif method is OmnibusMethod.TRIMMED_BOOTSTRAP:
        n_resamples = check_resamples(n_boot, "n_boot", warn_list)
        boot_seed, xi_seed = resolve_seed(seed).spawn(2)
        with timer.section('bootstrap'):
            p_value, n_effective = t1waybt_p_value(
                samples, stat, used_trim, n_resamples,
                seed=boot_seed, n_workers=n_workers,
            )
        if n_effective < n_resamples:
            warn_list.append(
                f"{n_resamples - n_effective} bootstrap resample(s) with a "
                f"zero-variance group were dropped; {n_effective} used"
            )
        with timer.section('effect_size'):
            xi = explanatory_xi(
                samples, used_trim, np.random.default_rng(xi_seed), labels=sample.levels,
            )
        robust_effect = make_effect_size('explanatory_xi', xi, None, 'd')

    with timer.section('effect_size'):
        effect = make_effect_size(
            'omega_squared', omega_squared_from_fit(fit), rules, 'omega_squared',
        )

    timer.stop()
    params = OmnibusParams(
        method=method.value,
        statistic=float(stat),
        statistic_name=stat_name,
        df=(float(df1), float(df2)),
        p_value=float(min(1.0, max(0.0, p_value))),
        effect_size=effect,
        robust_effect_size=robust_effect,
        levels=sample.levels,
        group_sizes=sample.sizes(),
        group_locations=locations,
        trim=used_trim,
        n_resamples=n_resamples,
        n_resamples_effective=n_effective,
    )
    return OmnibusSolution(_result=Result(
        params=params,
        info={'method': method.value, 'n': sample.n, 'seed': seed, 'n_workers': n_workers},
        timing=timer.result(),
        backend_name=f'cpu_{method.value}',
        warnings=tuple(warn_list),
    ))


def _classic_f(fit: OneWayFit) -> tuple[float, float, float]:
    if fit.df_within <= 0:
        raise InsufficientDataError(
            f"classic F: needs N > k (N={fit.n}, k={fit.k})", n=fit.n, required=fit.k + 1,
        )
    if fit.ms_within == 0:
        raise DegenerateGroupsError(
            "classic F: every group is constant, within-group variance is 0",
            groups=fit.levels,
        )
    f_val = (fit.ss_between / fit.df_between) / fit.ms_within
    return float(f_val), float(fit.df_between), float(fit.df_within)


def welch_anova(y, group=None, **kwargs) -> OmnibusSolution:
    """oneway_test(..., method='welch'). Matches oneway.test(var.equal = FALSE)."""
    return oneway_test(y, group, method=OmnibusMethod.WELCH, **kwargs)


def classic_anova(y, group=None, **kwargs) -> OmnibusSolution:
    """oneway_test(..., method='classic'). Matches oneway.test(var.equal = TRUE)."""
    return oneway_test(y, group, method=OmnibusMethod.CLASSIC, **kwargs)


def permutation_anova(y, group=None, **kwargs) -> OmnibusSolution:
    """oneway_test(..., method='permutation')."""
    return oneway_test(y, group, method=OmnibusMethod.PERMUTATION, **kwargs)


def trimmed_anova(y, group=None, **kwargs) -> OmnibusSolution:
    """oneway_test(..., method='trimmed'). Matches WRS2::t1way."""
    return oneway_test(y, group, method=OmnibusMethod.TRIMMED, **kwargs)


def trimmed_anova_bootstrap(y, group=None, **kwargs) -> OmnibusSolution:
    """oneway_test(..., method='trimmed_bootstrap'). Matches WRS2::t1waybt."""
    return oneway_test(y, group, method=OmnibusMethod.TRIMMED_BOOTSTRAP, **kwargs)


# =====================================================================
# Contrasts
# =====================================================================


def contrast_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    contrasts: ContrastSpec | Sequence[ContrastSpec] | None = None,
    *,
    levels: Sequence[Any] | None = None,
    alternative: str = "two.sided",
    conf_level: float = 0.95,
    p_adjust: str = "none",
) -> ContrastSolution:
    """
    Test planned linear contrasts of the group means.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        contrasts: One ContrastSpec or a sequence of them
        levels: Optional subset / order of groups
        alternative: 'two.sided', 'greater' (contrast > 0) or 'less'
        conf_level: Interval level (one-sided alternatives give one-sided bounds)
        p_adjust: Multiplicity correction across contrasts; default 'none'

    Returns:
        ContrastSolution; for a single contrast the shortcuts .estimate,
        .p_value, .direction_supported etc. read its row

    Raises:
        ValidationError: A contrast names a group not in the sample
        DegenerateGroupsError: Every group is constant (MS within is 0)
    """
    if contrasts is None:
        raise InvalidConfigurationError(
            "contrasts: at least one ContrastSpec is required",
            parameter="contrasts", value=None,
        )
    specs = [contrasts] if isinstance(contrasts, ContrastSpec) else list(contrasts)
    if not specs or not all(isinstance(s, ContrastSpec) for s in specs):
        raise InvalidConfigurationError(
            "contrasts: expected a ContrastSpec or a non-empty sequence of them",
            parameter="contrasts", value=contrasts,
        )
    alternative = check_alternative(alternative)
    conf_level = check_conf_level(conf_level)
    check_p_adjust_method(p_adjust)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    sample.require_min_size(1, "contrast_test")
    fit = fit_oneway(sample.y, sample.codes, sample.levels)
    if fit.df_within <= 0:
        raise InsufficientDataError(
            f"contrast_test: needs N > k (N={fit.n}, k={fit.k})",
            n=fit.n, required=fit.k + 1,
        )
    if fit.ms_within == 0:
        raise DegenerateGroupsError(
            "contrast_test: every group is constant, MS within is 0",
            groups=fit.levels,
        )

    vectors = [s.vector(sample.levels) for s in specs]
    df = float(fit.df_within)
    raw: list[tuple[float, float, float, float, np.ndarray]] = []
    for c in vectors:
        estimate, se = contrast_kernel(fit, c)
        t = estimate / se
        raw.append((estimate, se, t, t_pvalue(t, df, alternative),
                    t_conf_int(estimate, se, df, conf_level, alternative)))

    adjusted = _adjust([r[3] for r in raw], p_adjust)
    orthogonal = are_orthogonal(vectors, fit.sizes)
    warn_list: list[str] = []
    if len(specs) > 1 and p_adjust == "none" and not orthogonal:
        msg = (
            f"{len(specs)} non-orthogonal contrasts tested without multiplicity "
            f"adjustment; consider p_adjust='holm' or 'fdr'"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        warn_list.append(msg)

    rows = tuple(
        ContrastResult(
            name=spec.name,
            weights=dict(zip(sample.levels, (float(w) for w in c))),
            estimate=est, se=se, statistic=t, df=df,
            p_value=p, p_adjusted=float(p_adj),
            conf_int=(float(ci[0]), float(ci[1])),
            alternative=alternative,
            direction_supported=(
                None if alternative == "two.sided" else direction_matches(est, alternative)
            ),
        )
        for spec, c, (est, se, t, p, ci), p_adj in zip(specs, vectors, raw, adjusted)
    )

    timer.stop()
    params = ContrastParams(
        contrasts=rows,
        group_means=dict(zip(sample.levels, (float(m) for m in fit.means))),
        ms_within=float(fit.ms_within),
        df_within=int(fit.df_within),
        conf_level=conf_level,
        p_adjust=p_adjust,
        orthogonal=orthogonal,
    )
    return ContrastSolution(_result=Result(
        params=params,
        info={'n': sample.n, 'levels': sample.levels},
        timing=timer.result(),
        backend_name='cpu_contrast',
        warnings=tuple(warn_list),
    ))


# =====================================================================
# Post-hoc
# =====================================================================


def pairwise_test(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    method: PostHocMethod | str = PostHocMethod.GAMES_HOWELL,
    p_adjust: str = "fdr",
    levels: Sequence[Any] | None = None,
    conf_level: float = 0.95,
    pool_sd: bool = False,
    trim: float = DEFAULT_ROBUST_TRIM,
    n_boot: int = DEFAULT_N_BOOT,
    seed: int | None = None,
    n_workers: int = 1,
) -> PostHocSolution:
    """
    All pairwise comparisons with multiplicity-adjusted p-values.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        method: 'games_howell' (default), 'welch_t' or 'bootstrap'
        p_adjust: Any p.adjust method; default 'fdr' (Benjamini-Hochberg)
        levels: Optional subset / order of groups
        conf_level: Level of the per-comparison intervals
        pool_sd: welch_t only; pool the SD over all groups
        trim: bootstrap only; trimming proportion
        n_boot: bootstrap only; resamples per pair
        seed: bootstrap only; seed for all pairs
        n_workers: bootstrap only; threads, does not change results

    Returns:
        PostHocSolution, rows sorted by raw p-value ascending

    Examples:
        >>> res = pairwise_test(score, region)
        >>> res.comparison('north', 'south').p_adjusted
    """
    method = _coerce_enum(method, PostHocMethod, "method")
    check_p_adjust_method(p_adjust)
    conf_level = check_conf_level(conf_level)
    timer = Timer()
    timer.start()

    sample = as_sample(y, group, levels=levels)
    sample.require_n_groups(minimum=2)
    sample.require_min_size(2, "pairwise_test")
    groups = sample.groups()
    warn_list: list[str] = []
    used_trim = n_resamples = None

    with timer.section('comparisons'):
        if method is PostHocMethod.GAMES_HOWELL:
            rows = games_howell(groups, conf_level=conf_level)
        elif method is PostHocMethod.WELCH_T:
            fit = fit_oneway(sample.y, sample.codes, sample.levels)
            rows = pairwise_t(groups, fit, pool_sd=pool_sd, conf_level=conf_level)
        else:
            used_trim = check_trim(trim)
            n_resamples = check_resamples(n_boot, "n_boot", warn_list)
            rows = bootstrap_pairwise(
                groups, trim=used_trim, n_boot=n_resamples, conf_level=conf_level,
                seed=resolve_seed(seed), n_workers=n_workers,
            )

    rows.sort(key=lambda r: r.p_value)
    adjusted = _adjust([r.p_value for r in rows], p_adjust)
    rows = [replace(r, p_adjusted=float(p)) for r, p in zip(rows, adjusted)]

    timer.stop()
    params = PostHocParams(
        method=method.value,
        comparisons=tuple(rows),
        p_adjust=p_adjust,
        conf_level=conf_level,
        trim=used_trim,
        n_resamples=n_resamples,
    )
    return PostHocSolution(_result=Result(
        params=params,
        info={'n': sample.n, 'levels': sample.levels, 'seed': seed},
        timing=timer.result(),
        backend_name=f'cpu_{method.value}',
        warnings=tuple(warn_list),
    ))
