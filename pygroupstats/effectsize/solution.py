"""
Effect size solution type.

EffectSizeSolution wraps Result[EffectSize] and prints like R's effectsize
package tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pygroupstats.core.result import Result
from pygroupstats.effectsize._common import EffectSize

_DISPLAY_NAMES = {
    'omega_squared': "Omega2",
    'cohens_d': "Cohen's d",
    'akp_robust_d': "AKP robust d",
    'explanatory_xi': "Explanatory xi",
}


@dataclass
class EffectSizeSolution:
    """
    User-facing effect size result.

    Produced by omega_squared(), omega_squared_from_f(), cohens_d(),
    robust_cohens_d() and explanatory_effect().
    """
    _result: Result[EffectSize]

    @property
    def effect_size(self) -> EffectSize:
        """The underlying EffectSize record."""
        return self._result.params

    @property
    def name(self) -> str:
        return self._result.params.name

    @property
    def estimate(self) -> float:
        return self._result.params.estimate

    @property
    def conf_int(self) -> tuple[float, float] | None:
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float | None:
        return self._result.params.conf_level

    @property
    def interpretation(self) -> str | None:
        return self._result.params.interpretation

    @property
    def rules(self) -> str | None:
        return self._result.params.rules

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """
        Format like R's print.effectsize_table:

            Cohen's d |         95% CI
            --------------------------
            -1.26     | [-2.59, 0.13]

            - Interpretation rule set: cohen1988 (large)
        """
        es = self._result.params
        title = _DISPLAY_NAMES.get(es.name, es.name)
        lines = []
        if es.conf_int is not None:
            pct = int(round((es.conf_level or 0.95) * 100))
            ci_head = f"{pct}% CI"
            lines.append(f"{title:<16} | {ci_head:>20}")
            lines.append("-" * 39)
            ci = f"[{es.conf_int[0]:.2f}, {es.conf_int[1]:.2f}]"
            lines.append(f"{es.estimate:<16.2f} | {ci:>20}")
        else:
            lines.append(title)
            lines.append("-" * 16)
            lines.append(f"{es.estimate:.2f}")
        if es.interpretation is not None:
            lines.append("")
            lines.append(f"- Interpretation rule set: {es.rules} ({es.interpretation})")
        for w in self._result.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        es = self._result.params
        return f"EffectSizeSolution(name={es.name!r}, estimate={es.estimate:.4g})"
