"""
Common data types for one-way tests of group means.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container: no methods, no computation.
"""

from dataclasses import dataclass

from pygroupstats.effectsize._common import EffectSize


@dataclass(frozen=True)
class OmnibusParams:
    """
    Parameter payload for the omnibus tests.

    df is (df1, df2) for every method; for resampling methods it is the
    df of the observed statistic's classical reference distribution and
    is reported for orientation only.
    """
    method: str                              # OmnibusMethod value
    statistic: float
    statistic_name: str                      # 'F', 'Ft'
    df: tuple[float, float]
    p_value: float
    effect_size: EffectSize                  # omega-squared
    robust_effect_size: EffectSize | None    # explanatory xi (trimmed_bootstrap)
    levels: tuple[str, ...]
    group_sizes: dict[str, int]
    group_locations: dict[str, float]        # means, or trimmed means
    trim: float | None
    n_resamples: int | None
    n_resamples_effective: int | None


@dataclass(frozen=True)
class LeveneParams:
    """Parameter payload for the Brown-Forsythe / Levene test."""
    f_value: float
    p_value: float
    df_between: int
    df_within: int
    center: str                     # 'mean' or 'median'
    group_vars: dict[str, float]    # group -> variance


@dataclass(frozen=True)
class ContrastResult:
    """One tested contrast."""
    name: str
    weights: dict[str, float]       # every level, zero weights included
    estimate: float
    se: float
    statistic: float
    df: float
    p_value: float
    p_adjusted: float
    conf_int: tuple[float, float]
    alternative: str
    direction_supported: bool | None    # None for two-sided tests


@dataclass(frozen=True)
class ContrastParams:
    """Parameter payload for contrast_test()."""
    contrasts: tuple[ContrastResult, ...]
    group_means: dict[str, float]
    ms_within: float
    df_within: int
    conf_level: float
    p_adjust: str
    orthogonal: bool


@dataclass(frozen=True)
class PostHocComparison:
    """
    One row of a post-hoc table.

    estimate is group2 minus group1 (TukeyHSD orientation). statistic and
    df are None for the bootstrap method.
    """
    group1: str
    group2: str
    estimate: float
    se: float
    statistic: float | None
    df: float | None
    conf_int: tuple[float, float]
    p_value: float
    p_adjusted: float


@dataclass(frozen=True)
class PostHocParams:
    """Parameter payload for pairwise_test(); rows sorted by raw p."""
    method: str                                  # PostHocMethod value
    comparisons: tuple[PostHocComparison, ...]
    p_adjust: str
    conf_level: float
    trim: float | None
    n_resamples: int | None
