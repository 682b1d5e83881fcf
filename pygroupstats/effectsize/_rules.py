"""
Interpretation rule sets for effect sizes.

A rule set is data: ascending thresholds and one more label than there are
thresholds. A value v gets labels[i] for the first i with |v| < thresholds[i]
(or v < thresholds[i] for signed families), and the last label otherwise.
This mirrors the rules() objects of R's effectsize package.

Built-in sets:
    omega_squared: field2013 (default), cohen1992
    d:             cohen1988 (default), sawilowsky2009, gignac2016, lovakov2021
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass

from pygroupstats.core.exceptions import InvalidConfigurationError

VALID_FAMILIES = ("omega_squared", "d")


@dataclass(frozen=True)
class InterpretationRules:
    """
    Ordered threshold -> label mapping.

    Attributes:
        name: Registry key, usually the citation ('field2013')
        family: Which effect size family the thresholds apply to
        thresholds: Strictly increasing cut points
        labels: len(thresholds) + 1 labels, smallest magnitude first
        citation: Free-text reference
    """
    name: str
    family: str
    thresholds: tuple[float, ...]
    labels: tuple[str, ...]
    citation: str = ""

    def __post_init__(self):
        if self.family not in VALID_FAMILIES:
            raise InvalidConfigurationError(
                f"family: must be one of {VALID_FAMILIES}, got {self.family!r}",
                parameter="family", value=self.family,
            )
        if len(self.labels) != len(self.thresholds) + 1:
            raise InvalidConfigurationError(
                f"rules {self.name!r}: need {len(self.thresholds) + 1} labels "
                f"for {len(self.thresholds)} thresholds, got {len(self.labels)}",
                parameter="labels", value=self.labels,
            )
        if any(b <= a for a, b in zip(self.thresholds, self.thresholds[1:])):
            raise InvalidConfigurationError(
                f"rules {self.name!r}: thresholds must be strictly increasing, "
                f"got {self.thresholds}",
                parameter="thresholds", value=self.thresholds,
            )

    def label(self, value: float) -> str:
        """Label for a value; d-family rules use the magnitude."""
        v = abs(value) if self.family == "d" else value
        return self.labels[bisect.bisect_right(self.thresholds, v)]


_REGISTRY: dict[str, InterpretationRules] = {}

DEFAULT_RULES = {
    "omega_squared": "field2013",
    "d": "cohen1988",
}


def register_rules(rules: InterpretationRules, *, overwrite: bool = False) -> None:
    """Add a rule set to the registry."""
    if rules.name in _REGISTRY and not overwrite:
        raise InvalidConfigurationError(
            f"rules {rules.name!r} already registered; pass overwrite=True to replace",
            parameter="name", value=rules.name,
        )
    _REGISTRY[rules.name] = rules


def get_rules(name: str | InterpretationRules, family: str | None = None) -> InterpretationRules:
    """
    Look up a rule set by name (or pass one through).

    Raises:
        InvalidConfigurationError: Unknown name, or family mismatch
    """
    if isinstance(name, InterpretationRules):
        rules = name
    else:
        if name not in _REGISTRY:
            raise InvalidConfigurationError(
                f"rules: unknown rule set {name!r}. Available: {sorted(_REGISTRY)}",
                parameter="rules", value=name,
            )
        rules = _REGISTRY[name]
    if family is not None and rules.family != family:
        raise InvalidConfigurationError(
            f"rules {rules.name!r} interpret {rules.family!r}, not {family!r}",
            parameter="rules", value=rules.name,
        )
    return rules


def available_rules(family: str | None = None) -> tuple[str, ...]:
    """Names of registered rule sets, optionally for one family."""
    return tuple(sorted(
        name for name, r in _REGISTRY.items() if family is None or r.family == family
    ))


def interpret(value: float, rules: str | InterpretationRules) -> str:
    """Qualitative label for an effect size value."""
    return get_rules(rules).label(value)


for _rules in (
    InterpretationRules(
        name="field2013",
        family="omega_squared",
        thresholds=(0.01, 0.06, 0.14),
        labels=("very small", "small", "medium", "large"),
        citation="Field (2013). Discovering statistics using IBM SPSS Statistics.",
    ),
    InterpretationRules(
        name="cohen1992",
        family="omega_squared",
        thresholds=(0.02, 0.13, 0.26),
        labels=("very small", "small", "medium", "large"),
        citation="Cohen (1992). A power primer. Psychological Bulletin.",
    ),
    InterpretationRules(
        name="cohen1988",
        family="d",
        thresholds=(0.2, 0.5, 0.8),
        labels=("very small", "small", "medium", "large"),
        citation="Cohen (1988). Statistical power analysis for the behavioral sciences.",
    ),
    InterpretationRules(
        name="sawilowsky2009",
        family="d",
        thresholds=(0.1, 0.2, 0.5, 0.8, 1.2, 2.0),
        labels=("tiny", "very small", "small", "medium", "large", "very large", "huge"),
        citation="Sawilowsky (2009). New effect size rules of thumb.",
    ),
    InterpretationRules(
        name="gignac2016",
        family="d",
        thresholds=(0.2, 0.41, 0.63),
        labels=("very small", "small", "moderate", "large"),
        citation="Gignac & Szodorai (2016). Effect size guidelines for individual differences researchers.",
    ),
    InterpretationRules(
        name="lovakov2021",
        family="d",
        thresholds=(0.15, 0.36, 0.65),
        labels=("very small", "small", "medium", "large"),
        citation="Lovakov & Agadullina (2021). Empirically derived guidelines for effect size interpretation in social psychology.",
    ),
):
    register_rules(_rules)
del _rules
