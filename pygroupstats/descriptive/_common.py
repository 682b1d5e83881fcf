"""
Common data types for per-group descriptive statistics.

Frozen payloads only; no computation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupSummary:
    """
    describeBy-style summary of one group.

    Variances and sd use the n-1 denominator; se = sd / sqrt(n); mad is the
    median absolute deviation scaled by 1.4826; kurtosis is excess kurtosis.
    """
    group: str
    n: int
    mean: float
    trimmed_mean: float
    trim: float
    median: float
    sd: float
    variance: float
    se: float
    mad: float
    min: float
    max: float
    range: float
    skewness: float
    kurtosis: float


@dataclass(frozen=True)
class DescribeParams:
    """Parameter payload for describe_groups()."""
    groups: tuple[GroupSummary, ...]
    trim: float
    skew_type: int
