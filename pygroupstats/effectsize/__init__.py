"""
Effect sizes for one-way and two-group designs.

Public API:
    omega_squared(y, group, ...) -> EffectSizeSolution
    omega_squared_from_f(f, df1, df2) -> EffectSizeSolution
    cohens_d(y, group, ...) -> EffectSizeSolution
    robust_cohens_d(y, group, ...) -> EffectSizeSolution   # AKP
    explanatory_effect(y, group, ...) -> EffectSizeSolution  # Wilcox xi

Interpretation:
    interpret(value, rules) -> str
    get_rules(name), register_rules(rules), available_rules(family)
"""

from pygroupstats.effectsize._common import EffectSize
from pygroupstats.effectsize._rules import (
    DEFAULT_RULES,
    InterpretationRules,
    available_rules,
    get_rules,
    interpret,
    register_rules,
)
from pygroupstats.effectsize.solution import EffectSizeSolution
from pygroupstats.effectsize.solvers import (
    cohens_d,
    explanatory_effect,
    omega_squared,
    omega_squared_from_f,
    robust_cohens_d,
)

__all__ = [
    "omega_squared",
    "omega_squared_from_f",
    "cohens_d",
    "robust_cohens_d",
    "explanatory_effect",
    "EffectSize",
    "EffectSizeSolution",
    "InterpretationRules",
    "DEFAULT_RULES",
    "interpret",
    "get_rules",
    "register_rules",
    "available_rules",
]
