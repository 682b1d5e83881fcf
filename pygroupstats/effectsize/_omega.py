"""
Omega-squared for one-way designs.

From the sum-of-squares partition:
    omega^2 = (SS_between - (k - 1) MS_within) / (SS_total + MS_within)

From a reported F statistic (effectsize::F_to_omega2):
    omega^2 = (F - 1) df1 / (F df1 + df2 + 1)

Both are clipped at 0; negative values mean the between-group spread is
below what sampling noise alone produces.
"""

from __future__ import annotations

from pygroupstats.core.compute.oneway import OneWayFit
from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InsufficientDataError,
    InvalidConfigurationError,
)


def omega_squared_from_fit(fit: OneWayFit) -> float:
    """Omega-squared from a fitted group-mean model."""
    if fit.df_within <= 0:
        raise InsufficientDataError(
            f"omega-squared: needs N > k (N={fit.n}, k={fit.k})",
            n=fit.n, required=fit.k + 1,
        )
    denom = fit.ss_total + fit.ms_within
    if denom <= 0:
        raise DegenerateGroupsError(
            "omega-squared: every observation is identical, total variation is 0",
            groups=fit.levels,
        )
    value = (fit.ss_between - fit.df_between * fit.ms_within) / denom
    return max(0.0, float(value))


def omega_squared_f(f_value: float, df1: float, df2: float) -> float:
    """Omega-squared from an F statistic and its degrees of freedom."""
    if df1 <= 0 or df2 <= 0:
        raise InvalidConfigurationError(
            f"degrees of freedom must be positive, got df1={df1}, df2={df2}",
            parameter="df", value=(df1, df2),
        )
    if f_value < 0:
        raise InvalidConfigurationError(
            f"f_value: must be >= 0, got {f_value}",
            parameter="f_value", value=f_value,
        )
    value = (f_value - 1.0) * df1 / (f_value * df1 + df2 + 1.0)
    return max(0.0, float(value))
