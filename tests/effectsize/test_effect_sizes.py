"""
Tests for omega-squared, Cohen's d, the AKP robust d and xi.

Validates:
    - Hand-checked values on 1..5 vs 3..7
    - Antisymmetry d(A, B) = -d(B, A)
    - omega^2 consistent with d through t
    - Degenerate inputs raise instead of returning NaN
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats

from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InvalidConfigurationError,
    InvalidGroupCountError,
    NumericalError,
)
from pygroupstats.effectsize import (
    cohens_d,
    explanatory_effect,
    omega_squared,
    omega_squared_from_f,
    robust_cohens_d,
)
from pygroupstats.effectsize._cohen import _normal_conf_int, cohens_d_conf_int


# ═══════════════════════════════════════════════════════════════════════
# Omega-squared
# ═══════════════════════════════════════════════════════════════════════


class TestOmegaSquared:

    def test_known_value(self, two_groups):
        """SS_b = 10, SS_w = 20, MS_w = 2.5 -> (10 - 2.5) / (30 + 2.5) = 3/13."""
        y, g = two_groups
        res = omega_squared(y, g)
        assert res.estimate == pytest.approx(3.0 / 13.0)
        assert res.name == 'omega_squared'
        assert res.interpretation == 'large'
        assert res.rules == 'field2013'

    def test_consistent_with_d(self, two_groups):
        y, g = two_groups
        d = cohens_d(y, g).estimate
        t2 = d ** 2 * 5 * 5 / 10
        assert omega_squared(y, g).estimate == pytest.approx((t2 - 1) / (t2 + 10 - 1))

    def test_identical_groups_zero(self):
        y = np.tile([1.0, 2.0, 3.0, 4.0], 3)
        g = np.repeat(['a', 'b', 'c'], 4)
        assert omega_squared(y, g).estimate == 0.0

    def test_bounds(self, null_groups, three_groups):
        for y, g in (null_groups, three_groups):
            est = omega_squared(y, g).estimate
            assert 0.0 <= est <= 1.0

    def test_all_identical_raises(self):
        with pytest.raises(DegenerateGroupsError):
            omega_squared([2.0] * 6, list('aabbcc'))

    def test_one_group_raises(self):
        with pytest.raises(InvalidGroupCountError):
            omega_squared([1.0, 2.0, 3.0], ['a'] * 3)

    def test_rules_choice(self, two_groups):
        y, g = two_groups
        res = omega_squared(y, g, rules='cohen1992')
        assert res.interpretation == 'medium'
        assert omega_squared(y, g, rules=None).interpretation is None

    def test_d_rules_rejected(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError, match="cohen1988"):
            omega_squared(y, g, rules='cohen1988')

    def test_from_f(self):
        assert omega_squared_from_f(4.0, 1, 8).estimate == pytest.approx(3.0 / 13.0)
        assert omega_squared_from_f(0.5, 2, 20).estimate == 0.0

    def test_from_f_bad_df(self):
        with pytest.raises(InvalidConfigurationError):
            omega_squared_from_f(2.0, 0, 10)


# ═══════════════════════════════════════════════════════════════════════
# Cohen's d
# ═══════════════════════════════════════════════════════════════════════


class TestCohensD:

    def test_known_value(self, two_groups):
        y, g = two_groups
        res = cohens_d(y, g)
        assert res.estimate == pytest.approx(-2.0 / np.sqrt(2.5))
        assert res.interpretation == 'large'

    def test_antisymmetric(self, two_groups):
        y, g = two_groups
        ab = cohens_d(y, g, levels=('A', 'B'))
        ba = cohens_d(y, g, levels=('B', 'A'))
        assert ab.estimate == pytest.approx(-ba.estimate)
        assert_allclose(ab.conf_int, [-ba.conf_int[1], -ba.conf_int[0]], rtol=1e-6)

    def test_conf_int_inverts_noncentral_t(self, two_groups):
        y, g = two_groups
        res = cohens_d(y, g)
        scale = np.sqrt(5 * 5 / 10)
        t_obs = res.estimate * scale
        lo, hi = res.conf_int
        assert lo < res.estimate < hi
        assert stats.nct.cdf(t_obs, 8, lo * scale) == pytest.approx(0.975, abs=1e-6)
        assert stats.nct.cdf(t_obs, 8, hi * scale) == pytest.approx(0.025, abs=1e-6)

    def test_level_filter(self, three_groups):
        y, g = three_groups
        res = cohens_d(y, g, levels=('ctrl', 'high'))
        assert res.estimate < 0

    def test_three_groups_raise(self, three_groups):
        y, g = three_groups
        with pytest.raises(InvalidGroupCountError):
            cohens_d(y, g)

    def test_both_constant_raise(self):
        with pytest.raises(DegenerateGroupsError):
            cohens_d([1.0, 1.0, 2.0, 2.0], ['a', 'a', 'b', 'b'])

    def test_huge_separation_keeps_an_interval(self):
        y = [1.0, 2.0, 3.0, 1001.0, 1002.0, 1003.0]
        res = cohens_d(y, list('aaabbb'))
        assert res.estimate == pytest.approx(-1000.0)
        lo, hi = res.conf_int
        assert np.isfinite(lo) and np.isfinite(hi)
        assert lo < hi

    def test_normal_interval(self):
        lo, hi = _normal_conf_int(0.0, 10, 10, 0.95)
        assert hi == pytest.approx(stats.norm.ppf(0.975) * np.sqrt(0.2))
        assert lo == pytest.approx(-hi)

    def test_nonfinite_estimate_has_no_interval(self):
        with pytest.raises(NumericalError):
            cohens_d_conf_int(float('inf'), 5, 5, 0.95)

    def test_summary(self, two_groups):
        y, g = two_groups
        text = cohens_d(y, g).summary()
        assert "Cohen's d" in text
        assert "95% CI" in text
        assert "cohen1988 (large)" in text


# ═══════════════════════════════════════════════════════════════════════
# Robust d and xi
# ═══════════════════════════════════════════════════════════════════════


class TestRobustD:

    def test_zero_trim_equals_cohen(self, two_groups):
        y, g = two_groups
        robust = robust_cohens_d(y, g, trim=0.0, n_boot=1000, seed=1)
        assert robust.estimate == pytest.approx(cohens_d(y, g).estimate)

    def test_antisymmetric(self, three_groups):
        y, g = three_groups
        ab = robust_cohens_d(y, g, levels=('ctrl', 'low'), seed=3, n_boot=1000)
        ba = robust_cohens_d(y, g, levels=('low', 'ctrl'), seed=3, n_boot=1000)
        assert ab.estimate == pytest.approx(-ba.estimate)

    def test_reproducible_and_worker_invariant(self, three_groups):
        y, g = three_groups
        a = robust_cohens_d(y, g, levels=('ctrl', 'low'), seed=10, n_workers=1)
        b = robust_cohens_d(y, g, levels=('ctrl', 'low'), seed=10, n_workers=4)
        assert a.conf_int == b.conf_int
        assert a.info['n_boot_effective'] <= 2000

    def test_ci_brackets_estimate(self, three_groups):
        y, g = three_groups
        res = robust_cohens_d(y, g, levels=('ctrl', 'high'), seed=0)
        lo, hi = res.conf_int
        assert lo <= res.estimate <= hi
        assert res.conf_level == 0.95

    def test_low_n_boot_warns(self, two_groups):
        y, g = two_groups
        with pytest.warns(UserWarning, match="n_boot=200"):
            res = robust_cohens_d(y, g, n_boot=200, seed=0)
        assert res.warnings

    def test_bad_trim(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError):
            robust_cohens_d(y, g, trim=0.6)


class TestExplanatory:

    def test_zero_trim_known_value(self, two_groups):
        """var(3, 5) = 2; var of the pooled sample = 30/9; xi = sqrt(0.6)."""
        y, g = two_groups
        res = explanatory_effect(y, g, trim=0.0)
        assert res.estimate == pytest.approx(np.sqrt(0.6))
        assert res.interpretation is None

    def test_unequal_sizes_seeded(self, null_groups):
        y, g = null_groups
        a = explanatory_effect(y, g, seed=4).estimate
        b = explanatory_effect(y, g, seed=4).estimate
        assert a == b
        assert 0.0 <= a <= 1.0

    def test_constant_raises(self):
        with pytest.raises(DegenerateGroupsError):
            explanatory_effect([3.0] * 8, ['a'] * 4 + ['b'] * 4)
