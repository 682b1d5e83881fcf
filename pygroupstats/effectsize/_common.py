"""
Common data types for effect sizes.

EffectSize is the record every estimator returns, standalone or attached to
an omnibus / two-group test result.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygroupstats.effectsize._rules import InterpretationRules, get_rules


@dataclass(frozen=True)
class EffectSize:
    """
    A standardized effect size with optional interval and interpretation.

    Attributes:
        name: 'omega_squared', 'cohens_d', 'akp_robust_d', 'explanatory_xi'
        estimate: Point estimate
        conf_int: (lower, upper) or None
        conf_level: Level of conf_int, or None
        interpretation: Qualitative label from `rules`, or None
        rules: Name of the rule set that produced the label, or None
    """
    name: str
    estimate: float
    conf_int: tuple[float, float] | None = None
    conf_level: float | None = None
    interpretation: str | None = None
    rules: str | None = None

    def __str__(self) -> str:
        text = f"{self.name} = {self.estimate:.4f}"
        if self.conf_int is not None:
            pct = int(round((self.conf_level or 0.95) * 100))
            text += f", {pct}% CI [{self.conf_int[0]:.4f}, {self.conf_int[1]:.4f}]"
        if self.interpretation is not None:
            text += f" ({self.interpretation}; {self.rules})"
        return text


def make_effect_size(
    name: str,
    estimate: float,
    rules: str | InterpretationRules | None,
    family: str,
    conf_int: tuple[float, float] | None = None,
    conf_level: float | None = None,
) -> EffectSize:
    """Attach the interpretation of `rules` (if any) to an estimate."""
    if rules is None:
        return EffectSize(name, float(estimate), conf_int, conf_level)
    r = get_rules(rules, family)
    return EffectSize(
        name=name,
        estimate=float(estimate),
        conf_int=conf_int,
        conf_level=conf_level,
        interpretation=r.label(estimate),
        rules=r.name,
    )
