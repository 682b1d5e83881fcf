"""
Assumption diagnostics for the one-way model.

Public API:
    residuals(y, group) -> ResidualSample
    normality_test(y, group) -> HTestSolution          # Lilliefors on residuals
    homogeneity_test(y, group, ...) -> LeveneSolution   # Brown-Forsythe / Levene
    check_assumptions(y, group) -> AssumptionReport
"""

from pygroupstats.diagnostics._residuals import ResidualSample, residuals
from pygroupstats.diagnostics.solvers import (
    check_assumptions,
    homogeneity_test,
    normality_test,
)
from pygroupstats.diagnostics.solution import AssumptionReport

__all__ = [
    "residuals",
    "normality_test",
    "homogeneity_test",
    "check_assumptions",
    "ResidualSample",
    "AssumptionReport",
]
