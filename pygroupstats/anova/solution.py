"""
User-facing solution types for tests of group means.

Each solution wraps a Result[Params] and provides convenient accessors and
formatted summary output following R conventions.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from pygroupstats.anova._common import (
    ContrastParams,
    ContrastResult,
    LeveneParams,
    OmnibusParams,
    PostHocComparison,
    PostHocParams,
)
from pygroupstats.core.result import Result
from pygroupstats.effectsize._common import EffectSize
from pygroupstats.hypothesis.solution import format_pvalue


class _ResultMetadata:
    """info / timing / warnings accessors shared by every solution below."""
    _result: Result[Any]

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings


# =====================================================================
# OmnibusSolution
# =====================================================================

_OMNIBUS_TITLES = {
    'welch': "One-way analysis of means (not assuming equal variances)",
    'classic': "One-way analysis of means (assuming equal variances)",
    'permutation': "Permutation one-way ANOVA",
    'trimmed': "Heteroscedastic one-way ANOVA for trimmed means",
    'trimmed_bootstrap': "Bootstrap-t heteroscedastic one-way ANOVA for trimmed means",
}


@dataclass
class OmnibusSolution(_ResultMetadata):
    """
    User-facing result of an omnibus test.

    Produced by oneway_test() and its per-method wrappers.
    """
    _result: Result[OmnibusParams]

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def statistic(self) -> float:
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        return self._result.params.statistic_name

    @property
    def df(self) -> tuple[float, float]:
        """(df1, df2) of the statistic's F reference distribution."""
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def alternative(self) -> str:
        return "greater"

    @property
    def effect_size(self) -> EffectSize:
        """Omega-squared."""
        return self._result.params.effect_size

    @property
    def robust_effect_size(self) -> EffectSize | None:
        """Explanatory measure xi, for the trimmed bootstrap method."""
        return self._result.params.robust_effect_size

    @property
    def levels(self) -> tuple[str, ...]:
        return self._result.params.levels

    @property
    def group_sizes(self) -> dict[str, int]:
        return self._result.params.group_sizes

    @property
    def group_locations(self) -> dict[str, float]:
        """Group means, or trimmed means for the trimmed methods."""
        return self._result.params.group_locations

    @property
    def trim(self) -> float | None:
        return self._result.params.trim

    @property
    def n_resamples(self) -> int | None:
        return self._result.params.n_resamples

    @property
    def n_resamples_effective(self) -> int | None:
        return self._result.params.n_resamples_effective

    def summary(self) -> str:
        p = self._result.params
        lines = [
            f"\t{_OMNIBUS_TITLES.get(p.method, p.method)}",
            "",
            f"{p.statistic_name} = {p.statistic:.4f}, num df = {p.df[0]:.4g}, "
            f"denom df = {p.df[1]:.4g}, p-value = {format_pvalue(p.p_value)}",
        ]
        if p.n_resamples is not None:
            lines.append(
                f"resamples: {p.n_resamples_effective} used of {p.n_resamples} requested"
            )
        if p.trim is not None:
            lines.append(f"trim: {p.trim}")
        lines.append("")
        lines.append(f"{'group':<16} {'n':>6} {'location':>12}")
        for level in p.levels:
            lines.append(
                f"{level:<16} {p.group_sizes[level]:>6d} {p.group_locations[level]:>12.4f}"
            )
        lines.append("")
        lines.append(f"effect size: {p.effect_size}")
        if p.robust_effect_size is not None:
            lines.append(f"robust effect size: {p.robust_effect_size}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"OmnibusSolution(method={p.method!r}, {p.statistic_name}={p.statistic:.4f}, "
            f"p_value={p.p_value:.4g})"
        )


# =====================================================================
# ContrastSolution
# =====================================================================


@dataclass
class ContrastSolution(_ResultMetadata):
    """
    User-facing result of contrast_test().

    Iterates the ContrastResult rows in the order the specs were given.
    """
    _result: Result[ContrastParams]

    @property
    def contrasts(self) -> tuple[ContrastResult, ...]:
        return self._result.params.contrasts

    @property
    def group_means(self) -> dict[str, float]:
        return self._result.params.group_means

    @property
    def ms_within(self) -> float:
        return self._result.params.ms_within

    @property
    def df_within(self) -> int:
        return self._result.params.df_within

    @property
    def p_adjust(self) -> str:
        return self._result.params.p_adjust

    @property
    def orthogonal(self) -> bool:
        return self._result.params.orthogonal

    # Single-contrast shortcuts

    def _only(self) -> ContrastResult:
        rows = self._result.params.contrasts
        if len(rows) != 1:
            raise AttributeError(
                f"{len(rows)} contrasts were tested; index .contrasts instead"
            )
        return rows[0]

    @property
    def estimate(self) -> float:
        return self._only().estimate

    @property
    def statistic(self) -> float:
        return self._only().statistic

    @property
    def df(self) -> float:
        return self._only().df

    @property
    def p_value(self) -> float:
        return self._only().p_value

    @property
    def alternative(self) -> str:
        return self._only().alternative

    @property
    def conf_int(self) -> tuple[float, float]:
        return self._only().conf_int

    @property
    def direction_supported(self) -> bool | None:
        return self._only().direction_supported

    def __iter__(self):
        return iter(self._result.params.contrasts)

    def __len__(self) -> int:
        return len(self._result.params.contrasts)

    def summary(self) -> str:
        p = self._result.params
        pct = f"{p.conf_level:.0%}"
        lines = [
            "Linear contrasts of group means",
            "=" * 88,
            f"MS within = {p.ms_within:.4f} on {p.df_within} df; p adjustment: {p.p_adjust}",
            "",
            f"{'contrast':<28} {'estimate':>10} {'SE':>9} {'t':>8} {'p':>11} "
            f"{'p adj':>11} {pct + ' CI':>22}",
            "-" * 88,
        ]
        for c in p.contrasts:
            ci = f"[{c.conf_int[0]:.3f}, {c.conf_int[1]:.3f}]"
            lines.append(
                f"{c.name:<28} {c.estimate:>10.4f} {c.se:>9.4f} {c.statistic:>8.3f} "
                f"{c.p_value:>11.4g} {c.p_adjusted:>11.4g} {ci:>22} "
                f"{_significance_stars(c.p_adjusted)}"
            )
            if c.direction_supported is False:
                lines.append(f"  note: estimate is on the opposite side of H1 ({c.alternative})")
        lines.append("-" * 88)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ContrastSolution(n_contrasts={len(self.contrasts)}, p_adjust={self.p_adjust!r})"


# =====================================================================
# LeveneSolution
# =====================================================================


@dataclass
class LeveneSolution(_ResultMetadata):
    """
    User-facing result for the Brown-Forsythe / Levene test.

    Produced by homogeneity_test().
    """
    _result: Result[LeveneParams]

    @property
    def f_value(self) -> float:
        return self._result.params.f_value

    @property
    def statistic(self) -> float:
        return self._result.params.f_value

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def df(self) -> tuple[int, int]:
        return self._result.params.df_between, self._result.params.df_within

    @property
    def df_between(self) -> int:
        return self._result.params.df_between

    @property
    def df_within(self) -> int:
        return self._result.params.df_within

    @property
    def center(self) -> str:
        return self._result.params.center

    @property
    def group_vars(self) -> dict[str, float]:
        return self._result.params.group_vars

    def summary(self) -> str:
        variant = "Brown-Forsythe" if self.center == 'median' else "Levene"
        lines = [
            f"{variant} Test for Homogeneity of Variances",
            "=" * 50,
            f"F({self.df_between}, {self.df_within}) = {self.f_value:.4f}, "
            f"p = {self.p_value:.4e}",
            "",
            f"Center: {self.center}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LeveneSolution(F={self.f_value:.4f}, "
            f"p={self.p_value:.4e}, center={self.center!r})"
        )


# =====================================================================
# PostHocSolution
# =====================================================================

_POSTHOC_TITLES = {
    'games_howell': "Games-Howell Pairwise Comparisons",
    'welch_t': "Pairwise t-tests",
    'bootstrap': "Percentile Bootstrap Comparisons of Trimmed Means",
}


@dataclass
class PostHocSolution(_ResultMetadata):
    """
    User-facing post-hoc table.

    Rows are sorted by raw p-value, smallest first. Produced by
    pairwise_test().
    """
    _result: Result[PostHocParams]

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def comparisons(self) -> tuple[PostHocComparison, ...]:
        return self._result.params.comparisons

    @property
    def p_adjust(self) -> str:
        return self._result.params.p_adjust

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    def comparison(self, a: str, b: str) -> PostHocComparison:
        """Row for the pair {a, b}, in either order."""
        for c in self.comparisons:
            if {c.group1, c.group2} == {str(a), str(b)}:
                return c
        raise KeyError((a, b))

    def __iter__(self):
        return iter(self._result.params.comparisons)

    def __len__(self) -> int:
        return len(self._result.params.comparisons)

    def summary(self) -> str:
        p = self._result.params
        lines = [
            _POSTHOC_TITLES.get(p.method, p.method),
            "=" * 84,
            f"p-value adjustment: {p.p_adjust}; confidence level: {p.conf_level:.0%}",
            "",
            f"{'Comparison':<25} {'diff':>10} {'lwr':>10} {'upr':>10} "
            f"{'p':>12} {'p adj':>12}",
            "-" * 84,
        ]
        for c in p.comparisons:
            label = f"{c.group2}-{c.group1}"
            lines.append(
                f"{label:<25} {c.estimate:>10.4f} {c.conf_int[0]:>10.4f} "
                f"{c.conf_int[1]:>10.4f} {c.p_value:>12.4e} {c.p_adjusted:>12.4e} "
                f"{_significance_stars(c.p_adjusted)}"
            )
        lines.append("-" * 84)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PostHocSolution(method={self.method!r}, "
            f"n_comparisons={len(self.comparisons)}, p_adjust={self.p_adjust!r})"
        )


# =====================================================================
# Helpers
# =====================================================================


def _significance_stars(p: float | None) -> str:
    """Return significance stars for a p-value."""
    if p is None or np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""
