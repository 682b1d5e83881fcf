"""
Core infrastructure for pygroupstats.

This module provides shared abstractions and utilities used by all
component packages (descriptive, anova, effectsize, hypothesis,
montecarlo, diagnostics).

Key components:
    sample: GroupedSample, the validated one-factor input
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    defaults: Shared tuning defaults
    compute: Timing and robust location/scale kernels
"""

from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.core.result import Result
from pygroupstats.core.exceptions import (
    PyGroupStatsError,
    ValidationError,
    InsufficientDataError,
    InvalidGroupCountError,
    InvalidConfigurationError,
    NumericalError,
    DegenerateGroupsError,
    ResamplingPrecisionWarning,
)

__all__ = [
    # Sample
    "GroupedSample",
    "as_sample",
    # Result
    "Result",
    # Exceptions
    "PyGroupStatsError",
    "ValidationError",
    "InsufficientDataError",
    "InvalidGroupCountError",
    "InvalidConfigurationError",
    "NumericalError",
    "DegenerateGroupsError",
    "ResamplingPrecisionWarning",
]
