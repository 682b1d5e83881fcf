"""
Tests of group means across one factor.

Public API:
    oneway_test(y, group, method=...) -> OmnibusSolution   # welch / classic / permutation / trimmed / trimmed_bootstrap
    welch_anova, classic_anova, permutation_anova,
    trimmed_anova, trimmed_anova_bootstrap                 # per-method shortcuts
    contrast_test(y, group, contrasts) -> ContrastSolution  # planned linear contrasts
    pairwise_test(y, group, method=...) -> PostHocSolution  # Games-Howell / pairwise t / bootstrap
    one_sided_p(p, estimate, alternative) -> float
"""

from pygroupstats.anova.solvers import (
    OmnibusMethod,
    PostHocMethod,
    classic_anova,
    contrast_test,
    oneway_test,
    pairwise_test,
    permutation_anova,
    trimmed_anova,
    trimmed_anova_bootstrap,
    welch_anova,
)
from pygroupstats.anova._contrasts import ContrastSpec, one_sided_p
from pygroupstats.anova._common import ContrastResult, PostHocComparison
from pygroupstats.anova.solution import (
    ContrastSolution,
    LeveneSolution,
    OmnibusSolution,
    PostHocSolution,
)

__all__ = [
    "oneway_test",
    "welch_anova",
    "classic_anova",
    "permutation_anova",
    "trimmed_anova",
    "trimmed_anova_bootstrap",
    "contrast_test",
    "pairwise_test",
    "one_sided_p",
    "OmnibusMethod",
    "PostHocMethod",
    "ContrastSpec",
    "ContrastResult",
    "PostHocComparison",
    "OmnibusSolution",
    "ContrastSolution",
    "LeveneSolution",
    "PostHocSolution",
]
