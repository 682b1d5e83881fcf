"""
Tests for lillie_test() (nortest::lillie.test).
"""

import numpy as np
import pytest
from scipy import stats

from pygroupstats.core.exceptions import DegenerateGroupsError, InsufficientDataError
from pygroupstats.hypothesis import lillie_test
from pygroupstats.hypothesis.backends._ks_test import lillie_p_value, lillie_statistic


class TestLillieStatistic:

    def test_matches_ks_with_estimated_parameters(self, rng):
        x = rng.normal(3.0, 2.0, 40)
        expected = stats.kstest(x, 'norm', args=(np.mean(x), np.std(x, ddof=1))).statistic
        assert lillie_statistic(x) == pytest.approx(expected)

    def test_location_scale_invariant(self, rng):
        x = rng.normal(0.0, 1.0, 30)
        assert lillie_statistic(5.0 + 3.0 * x) == pytest.approx(lillie_statistic(x))


class TestLilliePValue:

    def test_dallal_wilkinson_branch(self):
        """D = 0.2, n = 20 falls below 0.1 in the Dallal-Wilkinson formula."""
        assert lillie_p_value(0.2, 20) == pytest.approx(0.03507, rel=1e-3)

    def test_small_distance_is_one(self):
        assert lillie_p_value(0.05, 20) == 1.0

    def test_large_distance_is_zero(self):
        assert lillie_p_value(0.6, 50) == pytest.approx(0.0, abs=1e-12)

    def test_large_n_scaling(self):
        p = lillie_p_value(0.05, 400)
        assert 0.0 <= p <= 1.0


class TestLillieTest:

    def test_normal_sample_not_rejected(self):
        x = 10.0 + 2.0 * stats.norm.ppf((np.arange(1, 81) - 0.5) / 80)
        res = lillie_test(x)
        assert res.p_value > 0.05
        assert res.statistic_name == "D"
        assert res.method == "Lilliefors (Kolmogorov-Smirnov) normality test"

    def test_skewed_sample_rejected(self):
        x = stats.expon.ppf((np.arange(1, 151) - 0.5) / 150)
        res = lillie_test(x)
        assert res.p_value < 0.01

    def test_ties_flagged(self):
        res = lillie_test([1.0, 2.0, 2.0, 3.0, 4.0, 5.0, 7.0])
        assert any("ties" in w for w in res.warnings)

    def test_too_few(self):
        with pytest.raises(InsufficientDataError):
            lillie_test([1.0, 2.0, 3.0, 4.0])

    def test_constant(self):
        with pytest.raises(DegenerateGroupsError):
            lillie_test([2.0] * 6)

    def test_rounding_level_spread_is_constant(self):
        with pytest.raises(DegenerateGroupsError):
            lillie_test([1e-17, -1e-17, 2e-17, 0.0, 0.0, 1e-17])

    def test_large_constant_with_rounding(self):
        x = np.full(8, 1.0e6) + np.array([0, 1, 0, -1, 0, 1, 0, -1]) * 1e-10
        with pytest.raises(DegenerateGroupsError):
            lillie_test(x)

    def test_data_name(self):
        res = lillie_test([1.0, 2.5, 3.0, 4.5, 6.0], data_name="scores")
        assert res.data_name == "scores"
        assert "data:  scores" in res.summary()
