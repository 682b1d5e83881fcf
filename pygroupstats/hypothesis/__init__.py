"""
Two-group and one-sample hypothesis tests.

Public API:
    welch_t_test(y, group)        - Welch / pooled two-sample t-test
    permutation_t_test(y, group)  - exact or Monte Carlo permutation test
    yuen_test(y, group)           - Yuen's trimmed-means test (+ bootstrap-t)
    lillie_test(x)                - Lilliefors normality test
    p_adjust(p)                   - Multiple testing correction (BH, Holm, ...)
"""

from pygroupstats.hypothesis.solvers import (
    lillie_test,
    permutation_t_test,
    welch_t_test,
    yuen_test,
)
from pygroupstats.hypothesis._p_adjust import p_adjust
from pygroupstats.hypothesis.design import HypothesisDesign
from pygroupstats.hypothesis._common import HTestParams
from pygroupstats.hypothesis.solution import HTestSolution

__all__ = [
    "welch_t_test",
    "permutation_t_test",
    "yuen_test",
    "lillie_test",
    "p_adjust",
    "HypothesisDesign",
    "HTestParams",
    "HTestSolution",
]
