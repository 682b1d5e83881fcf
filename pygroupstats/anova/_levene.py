"""
Levene-type tests for homogeneity of variances.

Algorithm: transform y to |y_i - center(group_j)|, then run the one-way
F test on the transformed values. center='median' gives the Brown-Forsythe
variant (robust, car::leveneTest's default); center='mean' gives Levene's
original test.
"""

import numpy as np
from scipy import stats as sp_stats

from pygroupstats.anova._common import LeveneParams
from pygroupstats.core.compute.oneway import fit_oneway
from pygroupstats.core.defaults import DEGENERATE_REL_TOL
from pygroupstats.core.exceptions import DegenerateGroupsError, InvalidConfigurationError
from pygroupstats.core.sample import GroupedSample

VALID_CENTERS = ('median', 'mean')


def levene_test_impl(sample: GroupedSample, *, center: str = 'median') -> LeveneParams:
    """
    Compute the Brown-Forsythe (default) or Levene test.

    Raises:
        InvalidConfigurationError: Unknown center
        DegenerateGroupsError: The absolute deviations are constant within
            every group, so the F ratio is undefined
    """
    if center not in VALID_CENTERS:
        raise InvalidConfigurationError(
            f"center: must be one of {VALID_CENTERS}, got {center!r}",
            parameter="center", value=center,
        )

    center_fn = np.median if center == 'median' else np.mean
    centers = np.array([center_fn(x) for x in sample.groups().values()])
    z = np.abs(sample.y - centers[sample.codes])

    fit = fit_oneway(z, sample.codes, sample.levels)
    scale = DEGENERATE_REL_TOL * max(1.0, float(np.max(np.abs(sample.y))))
    if fit.ss_within <= fit.n * scale ** 2:
        raise DegenerateGroupsError(
            "homogeneity test: absolute deviations are constant within every group",
            groups=sample.levels,
        )
    f_val = (fit.ss_between / fit.df_between) / fit.ms_within

    return LeveneParams(
        f_value=float(f_val),
        p_value=float(sp_stats.f.sf(f_val, fit.df_between, fit.df_within)),
        df_between=fit.df_between,
        df_within=fit.df_within,
        center=center,
        group_vars={
            level: float(np.var(x, ddof=1)) for level, x in sample.groups().items()
        },
    )
