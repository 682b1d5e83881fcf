"""
Post-hoc pairwise comparisons.

All k(k-1)/2 pairs are taken in level order (group1 before group2) and the
estimate is group2 - group1, as in TukeyHSD and rstatix.

Games-Howell:
    Welch standard error and df per pair; q = |t| sqrt(2) is referred to the
    studentized range distribution for k groups
    (scipy.stats.studentized_range). CI: diff +/- q_crit / sqrt(2) * SE.

Welch t:
    Pairwise t-tests. pool_sd=False uses the Welch test for the pair;
    pool_sd=True uses MS_within from all k groups on N - k df
    (pairwise.t.test(pool.sd = TRUE)).

Bootstrap:
    Percentile bootstrap of trimmed-mean differences (WRS2::mcppb20).
    With P = P*(D* > 0) + P*(D* = 0) / 2, p = 2 min(P, 1 - P), floored at
    1 / (R + 1).
"""

from __future__ import annotations

from itertools import combinations
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pygroupstats.anova._common import PostHocComparison
from pygroupstats.core.compute.oneway import OneWayFit
from pygroupstats.core.compute.robust import trimmed_mean
from pygroupstats.core.exceptions import DegenerateGroupsError
from pygroupstats.hypothesis.backends._t_test import t_conf_int, t_pvalue
from pygroupstats.montecarlo import bootstrap_indices, replicate

GroupMap = dict[str, NDArray[np.floating[Any]]]


def _pairs(levels: tuple[str, ...]) -> list[tuple[str, str]]:
    return list(combinations(levels, 2))


def _welch_parts(x1, x2, pair) -> tuple[float, float]:
    v1 = np.var(x1, ddof=1) / len(x1)
    v2 = np.var(x2, ddof=1) / len(x2)
    if v1 + v2 == 0:
        raise DegenerateGroupsError(
            f"groups {list(pair)} are both constant; the pairwise standard error is 0",
            groups=pair,
        )
    se = float(np.sqrt(v1 + v2))
    df = float((v1 + v2) ** 2 / (v1 ** 2 / (len(x1) - 1) + v2 ** 2 / (len(x2) - 1)))
    return se, df


def games_howell(groups: GroupMap, *, conf_level: float) -> list[PostHocComparison]:
    """Games-Howell comparisons with raw (studentized range) p-values."""
    levels = tuple(groups)
    k = len(levels)
    rows: list[PostHocComparison] = []
    for g1, g2 in _pairs(levels):
        x1, x2 = groups[g1], groups[g2]
        diff = float(np.mean(x2) - np.mean(x1))
        se, df = _welch_parts(x1, x2, (g1, g2))
        t = diff / se
        p = float(sp_stats.studentized_range.sf(abs(t) * np.sqrt(2.0), k, df))
        q_crit = float(sp_stats.studentized_range.ppf(conf_level, k, df))
        margin = q_crit / np.sqrt(2.0) * se
        rows.append(PostHocComparison(
            group1=g1, group2=g2,
            estimate=diff, se=se, statistic=t, df=df,
            conf_int=(diff - margin, diff + margin),
            p_value=min(1.0, p), p_adjusted=min(1.0, p),
        ))
    return rows


def pairwise_t(
    groups: GroupMap,
    fit: OneWayFit,
    *,
    pool_sd: bool,
    conf_level: float,
) -> list[PostHocComparison]:
    """Pairwise t-tests, Welch or pooled-SD."""
    rows: list[PostHocComparison] = []
    if pool_sd and not fit.ms_within > 0:
        raise DegenerateGroupsError(
            "pooled SD is 0: every group is constant", groups=fit.levels,
        )
    for g1, g2 in _pairs(tuple(groups)):
        x1, x2 = groups[g1], groups[g2]
        diff = float(np.mean(x2) - np.mean(x1))
        if pool_sd:
            se = float(np.sqrt(fit.ms_within * (1.0 / len(x1) + 1.0 / len(x2))))
            df = float(fit.df_within)
        else:
            se, df = _welch_parts(x1, x2, (g1, g2))
        t = diff / se
        p = t_pvalue(t, df, "two.sided")
        lo, hi = t_conf_int(diff, se, df, conf_level, "two.sided")
        rows.append(PostHocComparison(
            group1=g1, group2=g2,
            estimate=diff, se=se, statistic=t, df=df,
            conf_int=(float(lo), float(hi)),
            p_value=p, p_adjusted=p,
        ))
    return rows


def bootstrap_pairwise(
    groups: GroupMap,
    *,
    trim: float,
    n_boot: int,
    conf_level: float,
    seed: np.random.SeedSequence,
    n_workers: int = 1,
) -> list[PostHocComparison]:
    """Percentile-bootstrap comparisons of trimmed means."""
    pairs = _pairs(tuple(groups))
    children = seed.spawn(len(pairs))
    alpha = 1.0 - conf_level
    rows: list[PostHocComparison] = []
    for (g1, g2), child in zip(pairs, children):
        x1, x2 = groups[g1], groups[g2]
        diff = float(trimmed_mean(x2, trim, name=g2) - trimmed_mean(x1, trim, name=g1))

        def kernel(rng: np.random.Generator, size: int, x1=x1, x2=x2) -> np.ndarray:
            b1 = x1[bootstrap_indices(rng, size, len(x1))]
            b2 = x2[bootstrap_indices(rng, size, len(x2))]
            return trimmed_mean(b2, trim) - trimmed_mean(b1, trim)

        d_star = replicate(kernel, n_boot, seed=child, n_workers=n_workers)
        share = (np.sum(d_star > 0) + 0.5 * np.sum(d_star == 0)) / n_boot
        p = max(2.0 * min(share, 1.0 - share), 1.0 / (n_boot + 1.0))
        lo, hi = np.quantile(d_star, [alpha / 2.0, 1.0 - alpha / 2.0])
        rows.append(PostHocComparison(
            group1=g1, group2=g2,
            estimate=diff, se=float(np.std(d_star, ddof=1)) if n_boot > 1 else float('nan'),
            statistic=None, df=None,
            conf_int=(float(lo), float(hi)),
            p_value=float(min(1.0, p)), p_adjusted=float(min(1.0, p)),
        ))
    return rows
