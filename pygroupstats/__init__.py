"""
PyGroupStats: comparing group means across one categorical factor.

Parametric, resampling and robust tests with matching effect sizes,
post-hoc comparisons and assumption checks, reported the way R does.

Submodules:
    descriptive: Per-group summaries
    anova: Omnibus tests, linear contrasts, pairwise comparisons
    effectsize: Omega-squared, Cohen's d, robust d, xi; interpretation rules
    hypothesis: Two-group tests, Lilliefors test, p-value adjustment
    diagnostics: Residual normality and homogeneity of variances
    montecarlo: Seeded, chunked resampling engine
"""

__version__ = "0.1.0"

from pygroupstats import anova
from pygroupstats import descriptive
from pygroupstats import diagnostics
from pygroupstats import effectsize
from pygroupstats import hypothesis
from pygroupstats import montecarlo
from pygroupstats.core.sample import GroupedSample

__all__ = [
    "__version__",
    "GroupedSample",
    "anova",
    "descriptive",
    "diagnostics",
    "effectsize",
    "hypothesis",
    "montecarlo",
]
