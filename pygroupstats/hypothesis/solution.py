"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams] and provides R's print.htest format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pygroupstats.core.result import Result
from pygroupstats.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from pygroupstats.effectsize._common import EffectSize
    from pygroupstats.hypothesis.design import HypothesisDesign


@dataclass
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams] and provides R's print.htest output format
    via summary(). All standard htest fields are available as properties.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Standard htest fields ---

    @property
    def statistic(self) -> float:
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        return self._result.params.statistic_name

    @property
    def parameter(self) -> dict[str, float] | None:
        return self._result.params.parameter

    @property
    def df(self) -> float | None:
        """Degrees of freedom, or None for resampling-only statistics."""
        par = self._result.params.parameter
        return None if par is None else par.get("df")

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def conf_int(self) -> NDArray[np.floating[Any]] | None:
        """Confidence interval, shape (2,)."""
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def estimate(self) -> dict[str, float] | None:
        return self._result.params.estimate

    @property
    def difference(self) -> float | None:
        """First estimate minus second, for two-group tests."""
        est = self._result.params.estimate
        if est is None or len(est) != 2:
            return None
        a, b = est.values()
        return a - b

    @property
    def null_value(self) -> dict[str, float] | None:
        return self._result.params.null_value

    @property
    def alternative(self) -> str:
        return self._result.params.alternative

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def data_name(self) -> str:
        return self._result.params.data_name

    # --- Test-specific extras ---

    @property
    def extras(self) -> dict[str, Any] | None:
        return self._result.params.extras

    @property
    def effect_size(self) -> 'EffectSize | None':
        """Cohen's d (t-test) or explanatory xi (Yuen), when computed."""
        e = self._result.params.extras
        return e.get('effect_size') if e else None

    @property
    def mode(self) -> str | None:
        """Permutation tests: 'exact' or 'monte_carlo'."""
        e = self._result.params.extras
        return e.get('mode') if e else None

    # --- Metadata ---

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

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format as R's print.htest output.

                Welch Two Sample t-test

        data:  y by group (a, b)
        t = -2, df = 8, p-value = 0.08052
        alternative hypothesis: true difference in means is not equal to 0
        95 percent confidence interval:
         -4.306004  0.306004
        sample estimates:
        mean in group a mean in group b
                      3               5
        """
        p = self._result.params
        lines = [f"\t{p.method}", "", f"data:  {p.data_name}"]

        parts = [f"{p.statistic_name} = {p.statistic:.5g}"]
        if p.parameter is not None:
            parts.extend(f"{name} = {val:.5g}" for name, val in p.parameter.items())
        parts.append(f"p-value = {format_pvalue(p.p_value)}")
        lines.append(", ".join(parts))

        if p.null_value:
            nv_name, nv_val = next(iter(p.null_value.items()))
            relation = {
                "two.sided": "is not equal to",
                "less": "is less than",
                "greater": "is greater than",
            }[p.alternative]
            lines.append(f"alternative hypothesis: true {nv_name} {relation} {nv_val:g}")

        if p.conf_int is not None:
            lines.append(f"{int(round(p.conf_level * 100))} percent confidence interval:")
            lo, hi = p.conf_int
            lines.append(f" {_format_number(lo)}  {_format_number(hi)}")

        if p.estimate is not None:
            lines.append("sample estimates:")
            names = list(p.estimate)
            width = max(len(n) for n in names)
            lines.append(" ".join(f"{n:>{width}s}" for n in names))
            lines.append(" ".join(f"{v:>{width}.7g}" for v in p.estimate.values()))

        extras = p.extras or {}
        if extras.get('effect_size') is not None:
            lines.append(f"effect size: {extras['effect_size']}")
        if extras.get('mode') is not None:
            lines.append(f"null distribution: {extras['mode']} ({extras['n_resamples']} resamples)")
        for w in self._result.warnings:
            lines.append(f"Warning: {w}")

        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(method={p.method!r}, {p.statistic_name}={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


def format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.7g}"
