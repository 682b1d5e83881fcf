"""
Tests for welch_t_test(), permutation_t_test() and yuen_test().

Welch values match R t.test(c(1:5), c(3:7)).
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats

from pygroupstats.core.defaults import MAX_EXACT_ASSIGNMENTS
from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InsufficientDataError,
    InvalidConfigurationError,
    InvalidGroupCountError,
    ResamplingPrecisionWarning,
)
from pygroupstats.hypothesis import permutation_t_test, welch_t_test, yuen_test
from pygroupstats.hypothesis.backends._perm_test import _exact_null


# ═══════════════════════════════════════════════════════════════════════
# Welch / Student t
# ═══════════════════════════════════════════════════════════════════════


class TestWelchTTest:

    def test_matches_r(self, two_groups):
        """t = -2, df = 8, p-value = 0.08052, CI -4.306004 0.306004."""
        y, g = two_groups
        res = welch_t_test(y, g)
        assert res.statistic == pytest.approx(-2.0)
        assert res.df == pytest.approx(8.0)
        assert res.p_value == pytest.approx(0.08051623, rel=1e-6)
        assert_allclose(res.conf_int, [-4.306004, 0.306004], rtol=1e-6)
        assert res.method == "Welch Two Sample t-test"
        assert res.estimate == {"mean in group A": 3.0, "mean in group B": 5.0}
        assert res.difference == pytest.approx(-2.0)
        assert res.p_value > 0.05

    def test_effect_size_attached(self, two_groups):
        y, g = two_groups
        es = welch_t_test(y, g).effect_size
        assert es.name == 'cohens_d'
        assert es.estimate == pytest.approx(-1.2649111, rel=1e-6)
        assert es.interpretation == 'large'

    def test_order_invariant_two_sided(self, two_groups):
        y, g = two_groups
        ab = welch_t_test(y, g, levels=('A', 'B'))
        ba = welch_t_test(y, g, levels=('B', 'A'))
        assert ab.p_value == pytest.approx(ba.p_value)
        assert ab.statistic == pytest.approx(-ba.statistic)

    def test_one_sided_mirror(self, two_groups):
        y, g = two_groups
        greater_ab = welch_t_test(y, g, levels=('A', 'B'), alternative='greater')
        less_ba = welch_t_test(y, g, levels=('B', 'A'), alternative='less')
        assert greater_ab.p_value == pytest.approx(less_ba.p_value)

    def test_one_sided_uses_tail(self, two_groups):
        y, g = two_groups
        less = welch_t_test(y, g, alternative='less')
        greater = welch_t_test(y, g, alternative='greater')
        assert less.p_value == pytest.approx(stats.t.cdf(-2.0, 8))
        assert greater.p_value == pytest.approx(1.0 - less.p_value)
        assert np.isinf(less.conf_int[0])

    def test_pooled(self, three_groups):
        y, g = three_groups
        res = welch_t_test(y, g, levels=('ctrl', 'low'), var_equal=True)
        assert res.df == pytest.approx(22.0)
        assert res.method == " Two Sample t-test"

    def test_mu_shift(self, two_groups):
        y, g = two_groups
        res = welch_t_test(y, g, mu=-2.0)
        assert res.statistic == pytest.approx(0.0, abs=1e-12)
        assert res.p_value == pytest.approx(1.0)

    def test_three_groups_raise(self, three_groups):
        y, g = three_groups
        with pytest.raises(InvalidGroupCountError):
            welch_t_test(y, g)

    def test_both_constant_raise(self):
        with pytest.raises(DegenerateGroupsError):
            welch_t_test([1.0, 1.0, 4.0, 4.0], list('aabb'))

    def test_huge_separation_still_tested(self):
        """Statistic and p-value do not depend on the Cohen's d interval."""
        res = welch_t_test([1.0, 2.0, 3.0, 1001.0, 1002.0, 1003.0], list('aaabbb'))
        assert res.statistic == pytest.approx(-1000.0 / np.sqrt(2.0 / 3.0))
        assert res.df == pytest.approx(4.0)
        assert res.p_value < 1e-8
        d = res.effect_size
        assert d.estimate == pytest.approx(-1000.0)
        if d.conf_int is not None:
            assert d.conf_int[0] < d.conf_int[1]

    def test_bad_alternative(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError):
            welch_t_test(y, g, alternative='bigger')

    def test_summary(self, two_groups):
        y, g = two_groups
        text = welch_t_test(y, g).summary()
        assert "Welch Two Sample t-test" in text
        assert "data:  y by group (A, B)" in text
        assert "p-value = 0.08052" in text


# ═══════════════════════════════════════════════════════════════════════
# Permutation
# ═══════════════════════════════════════════════════════════════════════


class TestPermutationTTest:

    def test_exact_mode(self, two_groups):
        y, g = two_groups
        res = permutation_t_test(y, g)
        assert res.mode == 'exact'
        assert res.extras['n_resamples'] == 252
        assert res.df is None
        assert res.statistic == pytest.approx(-2.0)
        count = res.p_value * 252
        assert count == pytest.approx(round(count))
        assert 0.0 < res.p_value <= 1.0

    def test_exact_one_sided(self, two_groups):
        y, g = two_groups
        two = permutation_t_test(y, g).p_value
        less = permutation_t_test(y, g, alternative='less').p_value
        greater = permutation_t_test(y, g, alternative='greater').p_value
        assert less < two
        assert greater > 0.5

    def test_monte_carlo_when_large(self, three_groups):
        y, g = three_groups
        res = permutation_t_test(y, g, levels=('ctrl', 'high'), seed=1)
        assert res.mode == 'monte_carlo'
        assert 1.0 / 10001 <= res.p_value <= 1.0

    def test_forced_modes(self, two_groups):
        y, g = two_groups
        res = permutation_t_test(y, g, distribution='monte_carlo', n_perm=2000, seed=2)
        assert res.mode == 'monte_carlo'
        exact = permutation_t_test(y, g, distribution='exact').p_value
        assert res.p_value == pytest.approx(exact, abs=0.03)

    def test_exact_limit(self, two_groups):
        y, g = two_groups
        res = permutation_t_test(y, g, exact_limit=100, seed=0)
        assert res.mode == 'monte_carlo'

    def test_worker_invariance(self, three_groups):
        y, g = three_groups
        kw = dict(levels=('ctrl', 'low'), seed=17, n_perm=3000)
        a = permutation_t_test(y, g, n_workers=1, **kw)
        b = permutation_t_test(y, g, n_workers=4, **kw)
        assert a.p_value == b.p_value

    def test_low_n_perm_warns(self, three_groups):
        y, g = three_groups
        with pytest.warns(ResamplingPrecisionWarning):
            res = permutation_t_test(y, g, levels=('ctrl', 'low'),
                                     distribution='monte_carlo', n_perm=100, seed=0)
        assert any("n_perm=100" in w for w in res.warnings)

    def test_bad_distribution(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError):
            permutation_t_test(y, g, distribution='asymptotic')

    def test_exact_refused_above_cap(self):
        rng = np.random.default_rng(3)
        y = rng.normal(size=80)
        g = np.repeat(['a', 'b'], 40)
        with pytest.raises(InvalidConfigurationError, match=str(MAX_EXACT_ASSIGNMENTS)):
            permutation_t_test(y, g, distribution='exact')

    def test_exact_limit_above_cap(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError):
            permutation_t_test(y, g, exact_limit=MAX_EXACT_ASSIGNMENTS + 1)

    def test_exact_null_chunking(self):
        pooled = np.array([1.0, 4.0, 2.0, 8.0, 5.0, 7.0, 3.0])
        whole = _exact_null(pooled, 3)
        assert len(whole) == 35
        assert_allclose(_exact_null(pooled, 3, chunk_size=4), whole)
        assert_allclose(np.mean(whole), 0.0, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Yuen
# ═══════════════════════════════════════════════════════════════════════


class TestYuenTest:

    def test_hand_computed(self, two_groups):
        """tm = 3, 5; winsorized var 1; d_j = 4/6; Ty = -sqrt(3); df = 4."""
        y, g = two_groups
        res = yuen_test(y, g)
        assert res.statistic == pytest.approx(-np.sqrt(3.0))
        assert res.df == pytest.approx(4.0)
        assert res.p_value == pytest.approx(2 * stats.t.sf(np.sqrt(3.0), 4))
        assert res.estimate == {
            "trimmed mean in group A": pytest.approx(3.0),
            "trimmed mean in group B": pytest.approx(5.0),
        }
        assert res.effect_size.name == 'explanatory_xi'

    def test_zero_trim_is_welch(self, three_groups):
        y, g = three_groups
        yuen = yuen_test(y, g, levels=('ctrl', 'low'), trim=0.0)
        welch = welch_t_test(y, g, levels=('ctrl', 'low'))
        assert yuen.statistic == pytest.approx(welch.statistic)
        assert yuen.df == pytest.approx(welch.df)
        assert yuen.p_value == pytest.approx(welch.p_value)

    def test_bootstrap_symmetric(self, three_groups):
        y, g = three_groups
        res = yuen_test(y, g, levels=('ctrl', 'high'), n_boot=1999, seed=8)
        assert res.df is None
        lo, hi = res.conf_int
        diff = res.difference
        assert diff - lo == pytest.approx(hi - diff)
        assert res.extras['n_resamples_effective'] <= 1999
        assert 1.0 / 2000 <= res.p_value <= 1.0

    def test_bootstrap_equal_tailed(self, three_groups):
        y, g = three_groups
        res = yuen_test(y, g, levels=('ctrl', 'high'), n_boot=1999, side=False, seed=8)
        lo, hi = res.conf_int
        assert lo < res.difference < hi

    def test_bootstrap_reproducible(self, three_groups):
        y, g = three_groups
        kw = dict(levels=('ctrl', 'low'), n_boot=1000, seed=21)
        a = yuen_test(y, g, n_workers=1, **kw)
        b = yuen_test(y, g, n_workers=3, **kw)
        assert a.p_value == b.p_value
        assert_allclose(a.conf_int, b.conf_int)

    def test_bootstrap_one_sided(self, three_groups):
        y, g = three_groups
        res = yuen_test(y, g, levels=('ctrl', 'high'), n_boot=1000, seed=1,
                        alternative='less')
        assert np.isinf(res.conf_int[0])
        assert res.p_value < 0.05

    def test_too_few_after_trim(self):
        y = [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]
        with pytest.raises(InsufficientDataError):
            yuen_test(y, list('aaabbb'), trim=0.4)

    def test_constant_raises(self):
        with pytest.raises(DegenerateGroupsError):
            yuen_test([2.0] * 5 + [3.0] * 5, ['a'] * 5 + ['b'] * 5)
