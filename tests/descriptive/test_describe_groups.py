"""
Tests for describe_groups() and trimmed_mean().

Reference values from psych::describeBy and base R mean(x, trim=).
"""

import numpy as np
import pytest

from pygroupstats.core import GroupedSample
from pygroupstats.core.exceptions import (
    InsufficientDataError,
    InvalidConfigurationError,
    ValidationError,
)
from pygroupstats.descriptive import describe_groups, trimmed_mean


class TestTrimmedMean:

    def test_outlier_trimmed(self):
        """mean(c(1, 2, 3, 4, 100), trim = 0.2) == 3"""
        assert trimmed_mean([1, 2, 3, 4, 100], 0.2) == pytest.approx(3.0)

    def test_floor_of_n_times_trim(self):
        """n = 9, trim = 0.1 -> floor(0.9) = 0 observations trimmed."""
        x = [1, 2, 3, 4, 5, 6, 7, 8, 90]
        assert trimmed_mean(x, 0.1) == pytest.approx(np.mean(x))

    def test_zero_trim_is_mean(self):
        assert trimmed_mean([2.0, 4.0, 9.0], 0.0) == pytest.approx(5.0)

    def test_bad_trim(self):
        with pytest.raises(InvalidConfigurationError):
            trimmed_mean([1, 2, 3], 0.5)

    def test_rejects_nan(self):
        with pytest.raises(ValidationError):
            trimmed_mean([1.0, np.nan, 3.0], 0.1)


class TestDescribeValues:

    def test_one_to_five(self, two_groups):
        y, g = two_groups
        res = describe_groups(y, g)
        a = res['A']
        assert a.n == 5
        assert a.mean == pytest.approx(3.0)
        assert a.median == pytest.approx(3.0)
        assert a.variance == pytest.approx(2.5)
        assert a.sd == pytest.approx(np.sqrt(2.5))
        assert a.se == pytest.approx(np.sqrt(0.5))
        assert a.mad == pytest.approx(1.4826)
        assert (a.min, a.max, a.range) == (1.0, 5.0, 4.0)
        assert a.skewness == pytest.approx(0.0, abs=1e-12)
        assert a.kurtosis == pytest.approx(-1.912)

    @pytest.mark.parametrize("skew_type, expected", [(1, -1.3), (2, -1.2), (3, -1.912)])
    def test_kurtosis_types(self, skew_type, expected):
        y = [1.0, 2.0, 3.0, 4.0, 5.0, 1.0, 2.0]
        g = ['a'] * 5 + ['b'] * 2
        res = describe_groups(y, g, skew_type=skew_type, levels=['a'])
        assert res['a'].kurtosis == pytest.approx(expected)

    @pytest.mark.parametrize("skew_type, expected", [(1, 2.0 / np.sqrt(3.0)), (2, 2.0), (3, 0.75)])
    def test_skewness_types(self, skew_type, expected):
        res = describe_groups([1.0, 1.0, 1.0, 4.0], ['a'] * 4, skew_type=skew_type)
        assert res['a'].skewness == pytest.approx(expected)

    def test_even_median(self):
        res = describe_groups([1.0, 2.0, 3.0, 10.0], ['a'] * 4)
        assert res['a'].median == pytest.approx(2.5)

    def test_trimmed_mean_per_group(self):
        y = list(range(1, 11)) + [100.0]
        g = ['a'] * 10 + ['b']
        res = describe_groups(y, g, trim=0.1, levels=['a'])
        assert res['a'].trimmed_mean == pytest.approx(5.5)
        assert res['a'].trim == 0.1

    def test_level_order(self, three_groups):
        y, g = three_groups
        res = describe_groups(y, g, levels=['low', 'ctrl'])
        assert res.levels == ('low', 'ctrl')
        assert [s.group for s in res] == ['low', 'ctrl']
        assert len(res) == 2

    def test_grouped_sample_input(self, two_groups):
        y, g = two_groups
        res = describe_groups(GroupedSample.from_arrays(y, g))
        assert res['B'].mean == pytest.approx(5.0)


class TestDescribeDegenerate:

    def test_constant_group_nan_moments_with_warning(self):
        y = [4.0, 4.0, 4.0, 1.0, 2.0, 3.0]
        g = ['flat'] * 3 + ['ok'] * 3
        with pytest.warns(RuntimeWarning, match="zero variance"):
            res = describe_groups(y, g)
        assert np.isnan(res['flat'].skewness)
        assert np.isnan(res['flat'].kurtosis)
        assert res['flat'].sd == 0.0
        assert any("'flat'" in w for w in res.warnings)

    def test_type2_small_n(self):
        with pytest.warns(RuntimeWarning, match="too small"):
            res = describe_groups([1.0, 2.0, 4.0], ['a'] * 3, skew_type=2)
        assert np.isnan(res['a'].kurtosis)
        assert not np.isnan(res['a'].skewness)

    def test_singleton_group_raises(self):
        with pytest.raises(InsufficientDataError):
            describe_groups([1.0, 2.0, 3.0], ['a', 'a', 'b'])

    def test_bad_skew_type(self):
        with pytest.raises(InvalidConfigurationError):
            describe_groups([1.0, 2.0], ['a', 'a'], skew_type=4)


class TestDescribeOutput:

    def test_summary(self, two_groups):
        y, g = two_groups
        text = describe_groups(y, g).summary()
        assert "Descriptive statistics by group" in text
        assert "kurtosis" in text

    def test_missing_level_key(self, two_groups):
        y, g = two_groups
        with pytest.raises(KeyError):
            describe_groups(y, g)['C']

    def test_timing_and_backend(self, two_groups):
        y, g = two_groups
        res = describe_groups(y, g)
        assert res.backend_name == 'cpu_describe'
        assert 'total_seconds' in res.timing

    def test_to_dataframe(self, two_groups):
        pytest.importorskip("pandas")
        y, g = two_groups
        df = describe_groups(y, g).to_dataframe()
        assert list(df.index) == ['A', 'B']
        assert df.loc['B', 'mean'] == pytest.approx(5.0)
