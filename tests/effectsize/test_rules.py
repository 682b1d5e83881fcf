"""
Tests for the interpretation rule registry.
"""

import pytest

from pygroupstats.core.exceptions import InvalidConfigurationError
from pygroupstats.effectsize import (
    DEFAULT_RULES,
    InterpretationRules,
    available_rules,
    get_rules,
    interpret,
    register_rules,
)


class TestBuiltInRules:

    @pytest.mark.parametrize("value, label", [
        (0.1, 'very small'), (0.2, 'small'), (0.5, 'medium'), (0.8, 'large'), (-1.3, 'large'),
    ])
    def test_cohen1988(self, value, label):
        assert interpret(value, 'cohen1988') == label

    @pytest.mark.parametrize("value, label", [
        (0.005, 'very small'), (0.01, 'small'), (0.06, 'medium'), (0.14, 'large'),
    ])
    def test_field2013(self, value, label):
        assert interpret(value, 'field2013') == label

    def test_sawilowsky_huge(self):
        assert interpret(2.5, 'sawilowsky2009') == 'huge'

    def test_families(self):
        assert set(available_rules('omega_squared')) == {'field2013', 'cohen1992'}
        assert {'cohen1988', 'sawilowsky2009', 'gignac2016', 'lovakov2021'} <= set(
            available_rules('d')
        )

    def test_defaults(self):
        assert DEFAULT_RULES == {'omega_squared': 'field2013', 'd': 'cohen1988'}


class TestRegistry:

    def test_register_custom(self):
        rules = InterpretationRules(
            name='test_custom_d', family='d',
            thresholds=(0.3,), labels=('negligible', 'notable'),
        )
        register_rules(rules)
        assert interpret(0.31, 'test_custom_d') == 'notable'
        assert get_rules('test_custom_d') is rules
        with pytest.raises(InvalidConfigurationError, match="already registered"):
            register_rules(rules)
        register_rules(rules, overwrite=True)

    def test_pass_rules_object(self):
        rules = InterpretationRules('adhoc', 'd', (1.0,), ('low', 'high'))
        assert interpret(-2.0, rules) == 'high'

    def test_unknown_name(self):
        with pytest.raises(InvalidConfigurationError, match="unknown rule set"):
            get_rules('nope')

    def test_family_mismatch(self):
        with pytest.raises(InvalidConfigurationError):
            get_rules('field2013', 'd')

    def test_label_count_checked(self):
        with pytest.raises(InvalidConfigurationError, match="labels"):
            InterpretationRules('bad', 'd', (0.2, 0.5), ('a', 'b'))

    def test_thresholds_increasing(self):
        with pytest.raises(InvalidConfigurationError, match="increasing"):
            InterpretationRules('bad', 'd', (0.5, 0.2), ('a', 'b', 'c'))

    def test_unknown_family(self):
        with pytest.raises(InvalidConfigurationError):
            InterpretationRules('bad', 'r', (0.1,), ('a', 'b'))
