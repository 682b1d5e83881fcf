"""
Per-group descriptive statistics.

Public API:
    describe_groups(y, group, ...) -> DescribeSolution
    trimmed_mean(x, trim) -> float
"""

from pygroupstats.descriptive._common import GroupSummary
from pygroupstats.descriptive.solution import DescribeSolution
from pygroupstats.descriptive.solvers import describe_groups, trimmed_mean

__all__ = [
    "describe_groups",
    "trimmed_mean",
    "DescribeSolution",
    "GroupSummary",
]
