"""
Linear contrasts of group means in the one-way model.

For weights c_j the estimated marginal means are the group means m_j and

    psi = sum c_j m_j
    SE  = sqrt(MS_within * sum c_j^2 / n_j)
    t   = psi / SE   on N - k df

as emmeans::contrast() reports for a one-way lm fit.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.compute.oneway import OneWayFit
from pygroupstats.core.exceptions import InvalidConfigurationError, ValidationError
from pygroupstats.core.validation import check_alternative

# Relative tolerance for "weights sum to zero" and orthogonality checks
_ZERO_TOL = 1e-10


@dataclass(frozen=True, eq=False)
class ContrastSpec:
    """
    Signed weights over groups.

    Groups not named get weight 0. Weights must sum to zero (a contrast)
    unless allow_nonzero_sum=True (a plain linear combination of means).

    Examples:
        >>> ContrastSpec({'treat_a': 0.5, 'treat_b': 0.5, 'control': -1})
        >>> ContrastSpec.pairwise('treat_a', 'control')
    """
    weights: Mapping[str, float]
    name: str | None = None
    allow_nonzero_sum: bool = False

    def __post_init__(self):
        clean: dict[str, float] = {}
        for key, value in dict(self.weights).items():
            try:
                w = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(
                    f"contrast weight for {key!r}: expected a number, got {value!r}",
                    parameter="weights", value=value,
                ) from e
            if not math.isfinite(w):
                raise InvalidConfigurationError(
                    f"contrast weight for {key!r} is not finite: {w}",
                    parameter="weights", value=value,
                )
            clean[str(key)] = w
        if not any(w != 0.0 for w in clean.values()):
            raise InvalidConfigurationError(
                "contrast: every weight is zero", parameter="weights", value=clean,
            )
        total = sum(clean.values())
        scale = sum(abs(w) for w in clean.values())
        if not self.allow_nonzero_sum and abs(total) > _ZERO_TOL * scale:
            raise InvalidConfigurationError(
                f"contrast: weights sum to {total:g}, not 0; pass "
                f"allow_nonzero_sum=True for a plain linear combination",
                parameter="weights", value=clean,
            )
        object.__setattr__(self, 'weights', MappingProxyType(clean))
        if self.name is None:
            object.__setattr__(self, 'name', _default_name(clean))

    @classmethod
    def pairwise(cls, a: Any, b: Any) -> ContrastSpec:
        """Simple difference a - b."""
        a, b = str(a), str(b)
        if a == b:
            raise InvalidConfigurationError(
                f"pairwise contrast needs two different groups, got {a!r} twice",
                parameter="weights", value=(a, b),
            )
        return cls({a: 1.0, b: -1.0}, name=f"{a} - {b}")

    @property
    def is_canonical(self) -> bool:
        """True for a simple difference: one +1, one -1, all else 0."""
        nonzero = sorted(w for w in self.weights.values() if w != 0.0)
        return nonzero == [-1.0, 1.0]

    def vector(self, levels: tuple[str, ...]) -> NDArray[np.floating[Any]]:
        """
        Weights aligned to `levels`.

        Raises:
            ValidationError: A weighted group is not among the levels
        """
        unknown = [g for g in self.weights if g not in levels]
        if unknown:
            raise ValidationError(
                f"contrast {self.name!r}: unknown group(s) {unknown}; "
                f"available: {list(levels)}"
            )
        return np.array([self.weights.get(level, 0.0) for level in levels])

    def __repr__(self) -> str:
        return f"ContrastSpec({dict(self.weights)!r}, name={self.name!r})"


def _default_name(weights: dict[str, float]) -> str:
    parts = []
    for level, w in weights.items():
        if w == 0.0:
            continue
        sign = "-" if w < 0 else "+"
        mag = abs(w)
        coef = "" if mag == 1.0 else f"{mag:g}*"
        parts.append(f"{sign} {coef}{level}")
    text = " ".join(parts)
    return text[2:] if text.startswith("+ ") else text


def one_sided_p(p_two_sided: float, estimate: float, alternative: str) -> float:
    """
    One-sided p-value from a two-sided p of a symmetric test.

    Halves the p-value only when the estimate lies in the hypothesised
    direction; otherwise returns 1 - p/2.

    Args:
        p_two_sided: Two-sided p-value in [0, 1]
        estimate: Signed point estimate the test was based on
        alternative: 'greater' or 'less'
    """
    if not (0.0 <= p_two_sided <= 1.0):
        raise InvalidConfigurationError(
            f"p_two_sided: must be in [0, 1], got {p_two_sided}",
            parameter="p_two_sided", value=p_two_sided,
        )
    check_alternative(alternative)
    if alternative == "two.sided":
        raise InvalidConfigurationError(
            "one_sided_p: alternative must be 'greater' or 'less'",
            parameter="alternative", value=alternative,
        )
    if direction_matches(estimate, alternative):
        return p_two_sided / 2.0
    return 1.0 - p_two_sided / 2.0


def direction_matches(estimate: float, alternative: str) -> bool:
    """Whether the estimate's sign agrees with a one-sided alternative."""
    if alternative == "greater":
        return estimate >= 0
    return estimate <= 0


def contrast_kernel(fit: OneWayFit, c: NDArray[np.floating[Any]]) -> tuple[float, float]:
    """(estimate, SE) of the contrast."""
    estimate = float(np.dot(c, fit.means))
    se = float(np.sqrt(fit.ms_within * np.sum(c ** 2 / fit.sizes)))
    return estimate, se


def are_orthogonal(vectors: list[NDArray[np.floating[Any]]], sizes: NDArray[np.intp]) -> bool:
    """Pairwise orthogonality, sum_j c_aj c_bj / n_j == 0, for every pair."""
    for i in range(len(vectors)):
        for j in range(i + 1, len(vectors)):
            cross = float(np.sum(vectors[i] * vectors[j] / sizes))
            scale = float(np.sum(np.abs(vectors[i] * vectors[j]) / sizes))
            if abs(cross) > _ZERO_TOL * max(scale, 1e-300):
                return False
    return True
