"""
Shared numeric infrastructure for pygroupstats.

IMPORTANT: This is NOT where procedures live. Those go in their component
packages. This module contains kernels used by more than one component.

Submodules:
    timing: Execution timing utilities
    robust: Trimmed / winsorized location and scale kernels
    oneway: Group-mean model and sum-of-squares partition
"""

from pygroupstats.core.compute.timing import Timer, timed
from pygroupstats.core.compute.oneway import OneWayFit, fit_oneway
from pygroupstats.core.compute.robust import (
    trimmed_mean,
    trim_count,
    winsorize,
    winsorized_variance,
    normal_winsor_constant,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Robust kernels
    "trimmed_mean",
    "trim_count",
    "winsorize",
    "winsorized_variance",
    "normal_winsor_constant",
    # One-way model
    "OneWayFit",
    "fit_oneway",
]
