"""
Tests for oneway_test() and its per-method wrappers.

Validates:
    - Welch F on two groups equals t^2 with the Welch df
    - Classic F equals the pooled t^2 on two groups
    - Identical groups give F = 0, p = 1, omega^2 = 0
    - Resampling p-values bounded and reproducible across n_workers
    - Degenerate and undersized groups raise
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pygroupstats.anova import (
    OmnibusMethod,
    classic_anova,
    oneway_test,
    permutation_anova,
    trimmed_anova,
    trimmed_anova_bootstrap,
    welch_anova,
)
from pygroupstats.core import GroupedSample
from pygroupstats.core.exceptions import (
    DegenerateGroupsError,
    InsufficientDataError,
    InvalidConfigurationError,
    InvalidGroupCountError,
    ResamplingPrecisionWarning,
)
from pygroupstats.hypothesis import welch_t_test


@pytest.fixture
def identical_groups():
    y = np.tile([1.0, 2.0, 3.0, 4.0, 5.0], 3)
    group = np.repeat(['a', 'b', 'c'], 5)
    return y, group


# ═══════════════════════════════════════════════════════════════════════
# Welch
# ═══════════════════════════════════════════════════════════════════════


class TestWelch:

    def test_default_method(self, two_groups):
        y, g = two_groups
        res = oneway_test(y, g)
        assert res.method == 'welch'
        assert res.backend_name == 'cpu_welch'
        assert res.alternative == 'greater'

    def test_two_groups_is_t_squared(self, three_groups):
        y, g = three_groups
        f = welch_anova(y, g, levels=('ctrl', 'low'))
        t = welch_t_test(y, g, levels=('ctrl', 'low'))
        assert f.statistic == pytest.approx(t.statistic ** 2)
        assert f.df[0] == pytest.approx(1.0)
        assert f.df[1] == pytest.approx(t.df)
        assert f.p_value == pytest.approx(t.p_value)

    def test_known_two_groups(self, two_groups):
        y, g = two_groups
        res = oneway_test(y, g)
        assert res.statistic == pytest.approx(4.0)
        assert_allclose(res.df, (1.0, 8.0))
        assert res.p_value == pytest.approx(0.08051623, rel=1e-6)
        assert res.effect_size.estimate == pytest.approx(3.0 / 13.0)

    def test_identical_groups(self, identical_groups):
        y, g = identical_groups
        res = oneway_test(y, g)
        assert res.statistic == pytest.approx(0.0, abs=1e-12)
        assert res.p_value == pytest.approx(1.0)
        assert res.effect_size.estimate == 0.0

    def test_clear_difference(self, three_groups):
        y, g = three_groups
        res = oneway_test(y, g)
        assert res.p_value < 0.001
        assert res.df[0] == 2.0
        assert 0.0 < res.effect_size.estimate <= 1.0
        assert set(res.group_locations) == {'ctrl', 'high', 'low'}

    def test_zero_variance_group_raises(self):
        y = [5.0, 5.0, 5.0, 1.0, 2.0, 3.0, 4.0, 6.0, 8.0]
        g = ['flat'] * 3 + ['b'] * 3 + ['c'] * 3
        with pytest.raises(DegenerateGroupsError) as exc:
            oneway_test(y, g)
        assert exc.value.groups == ('flat',)

    def test_summary(self, three_groups):
        y, g = three_groups
        text = oneway_test(y, g).summary()
        assert "not assuming equal variances" in text
        assert "effect size: omega_squared" in text


# ═══════════════════════════════════════════════════════════════════════
# Classic and trimmed
# ═══════════════════════════════════════════════════════════════════════


class TestClassic:

    def test_two_groups_is_pooled_t_squared(self, three_groups):
        y, g = three_groups
        f = classic_anova(y, g, levels=('ctrl', 'high'))
        t = welch_t_test(y, g, levels=('ctrl', 'high'), var_equal=True)
        assert f.statistic == pytest.approx(t.statistic ** 2)
        assert f.df == (1.0, 22.0)
        assert f.p_value == pytest.approx(t.p_value)

    def test_known_value(self, two_groups):
        y, g = two_groups
        assert classic_anova(y, g).statistic == pytest.approx(4.0)

    def test_all_constant_groups_raise(self):
        y = [1.0, 1.0, 2.0, 2.0, 3.0, 3.0]
        with pytest.raises(DegenerateGroupsError):
            classic_anova(y, list('aabbcc'))


class TestTrimmed:

    def test_zero_trim_equals_welch(self, three_groups):
        y, g = three_groups
        trimmed = trimmed_anova(y, g, trim=0.0)
        welch = welch_anova(y, g)
        assert trimmed.statistic == pytest.approx(welch.statistic)
        assert trimmed.df == pytest.approx(welch.df)
        assert trimmed.statistic_name == 'Ft'

    def test_locations_are_trimmed_means(self, two_groups):
        y, g = two_groups
        res = trimmed_anova(y, g)
        assert res.trim == 0.2
        assert res.group_locations == {'A': pytest.approx(3.0), 'B': pytest.approx(5.0)}

    def test_outlier_resistance(self):
        base = np.tile([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0], 3)
        y = base.copy()
        y[9] = 500.0
        g = np.repeat(['a', 'b', 'c'], 10)
        assert trimmed_anova(y, g).p_value > 0.5

    def test_too_few_after_trim(self):
        y = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0]
        with pytest.raises(InsufficientDataError):
            trimmed_anova(y, list("aaabbbccc"), trim=0.4)


# ═══════════════════════════════════════════════════════════════════════
# Resampling methods
# ═══════════════════════════════════════════════════════════════════════


class TestPermutation:

    def test_bounds_and_counts(self, three_groups):
        y, g = three_groups
        res = permutation_anova(y, g, n_perm=2000, seed=1)
        assert 1.0 / 2001 <= res.p_value <= 1.0
        assert res.n_resamples == 2000
        assert res.n_resamples_effective == 2000
        assert res.p_value == pytest.approx(1.0 / 2001)

    def test_reports_classic_f(self, three_groups):
        y, g = three_groups
        res = permutation_anova(y, g, n_perm=1000, seed=1)
        assert res.statistic == pytest.approx(classic_anova(y, g).statistic)

    def test_identical_groups_p_one(self, identical_groups):
        y, g = identical_groups
        assert permutation_anova(y, g, n_perm=1000, seed=0).p_value == pytest.approx(1.0)

    def test_worker_invariance(self, null_groups):
        y, g = null_groups
        a = permutation_anova(y, g, seed=12, n_workers=1)
        b = permutation_anova(y, g, seed=12, n_workers=4)
        assert a.p_value == b.p_value

    def test_null_agrees_with_f(self, null_groups):
        y, g = null_groups
        perm = permutation_anova(y, g, n_perm=5000, seed=3)
        assert perm.p_value == pytest.approx(classic_anova(y, g).p_value, abs=0.05)

    def test_low_n_perm_flagged(self, three_groups):
        y, g = three_groups
        with pytest.warns(ResamplingPrecisionWarning):
            res = permutation_anova(y, g, n_perm=200, seed=0)
        assert len(res.warnings) == 1

    def test_non_numeric_n_perm(self, three_groups):
        y, g = three_groups
        with pytest.raises(InvalidConfigurationError, match="n_perm"):
            permutation_anova(y, g, n_perm="many")


class TestTrimmedBootstrap:

    def test_result_shape(self, three_groups):
        y, g = three_groups
        res = trimmed_anova_bootstrap(y, g, n_boot=1000, seed=5)
        assert res.method == 'trimmed_bootstrap'
        assert res.n_resamples == 1000
        assert res.n_resamples_effective <= 1000
        assert 1.0 / 1001 <= res.p_value <= 1.0
        assert res.p_value < 0.01
        xi = res.robust_effect_size
        assert xi.name == 'explanatory_xi'
        assert 0.0 <= xi.estimate <= 1.0

    def test_statistic_matches_trimmed(self, three_groups):
        y, g = three_groups
        boot = trimmed_anova_bootstrap(y, g, n_boot=1000, seed=5)
        assert boot.statistic == pytest.approx(trimmed_anova(y, g).statistic)

    def test_reproducible(self, null_groups):
        y, g = null_groups
        a = oneway_test(y, g, method='trimmed_bootstrap', seed=9, n_workers=1)
        b = oneway_test(y, g, method='trimmed_bootstrap', seed=9, n_workers=3)
        assert a.p_value == b.p_value
        assert a.robust_effect_size.estimate == b.robust_effect_size.estimate


# ═══════════════════════════════════════════════════════════════════════
# Input validation
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    def test_one_group(self):
        with pytest.raises(InvalidGroupCountError):
            oneway_test([1.0, 2.0, 3.0], ['a'] * 3)

    def test_singleton_group(self):
        with pytest.raises(InsufficientDataError):
            oneway_test([1.0, 2.0, 3.0, 4.0, 5.0], ['a', 'a', 'b', 'b', 'c'])

    def test_unknown_method(self, two_groups):
        y, g = two_groups
        with pytest.raises(InvalidConfigurationError, match="method"):
            oneway_test(y, g, method='kruskal')

    def test_enum_and_string_agree(self, three_groups):
        y, g = three_groups
        a = oneway_test(y, g, method=OmnibusMethod.CLASSIC)
        b = oneway_test(y, g, method='classic')
        assert a.statistic == b.statistic

    def test_grouped_sample_input(self, three_groups):
        y, g = three_groups
        sample = GroupedSample.from_arrays(y, g)
        assert oneway_test(sample).statistic == pytest.approx(oneway_test(y, g).statistic)

    def test_timing(self, three_groups):
        y, g = three_groups
        res = oneway_test(y, g)
        assert 'total_seconds' in res.timing
        assert 'statistic' in res.timing
