"""
Advisory report produced by check_assumptions().
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pygroupstats.anova.solution import LeveneSolution
from pygroupstats.hypothesis.solution import HTestSolution, format_pvalue


@dataclass(frozen=True)
class AssumptionReport:
    """
    Outcome of the normality and equal-variance checks.

    A check that could not run (too few residuals, constant absolute
    deviations) is None and its reason is listed in `notes`. The report
    only advises; nothing here stops a test from being run.

    Attributes:
        normality: Lilliefors test on the model residuals, or None
        homogeneity: Brown-Forsythe / Levene test, or None
        alpha: Level at which a check is called failed
        recommended_method: Suggested oneway_test() method
        notes: Human-readable observations
    """
    normality: HTestSolution | None
    homogeneity: LeveneSolution | None
    alpha: float
    recommended_method: str
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def residuals_normal(self) -> bool | None:
        """False when normality is rejected at alpha; None if not checked."""
        if self.normality is None:
            return None
        return self.normality.p_value >= self.alpha

    @property
    def variances_equal(self) -> bool | None:
        """False when homogeneity is rejected at alpha; None if not checked."""
        if self.homogeneity is None:
            return None
        return self.homogeneity.p_value >= self.alpha

    def summary(self) -> str:
        lines = ["Assumption checks for the one-way model", "=" * 50]
        if self.normality is not None:
            lines.append(
                f"Normality (Lilliefors):      D = {self.normality.statistic:.4f}, "
                f"p-value = {format_pvalue(self.normality.p_value)}"
            )
        else:
            lines.append("Normality (Lilliefors):      not run")
        if self.homogeneity is not None:
            h = self.homogeneity
            name = "Brown-Forsythe" if h.center == 'median' else "Levene"
            lines.append(
                f"Equal variances ({name}): F({h.df_between}, {h.df_within}) = "
                f"{h.f_value:.4f}, p-value = {format_pvalue(h.p_value)}"
            )
        else:
            lines.append("Equal variances:             not run")
        lines.append("")
        lines.append(f"Suggested omnibus method: {self.recommended_method!r} (alpha = {self.alpha})")
        for note in self.notes:
            lines.append(f"Note: {note}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AssumptionReport(residuals_normal={self.residuals_normal}, "
            f"variances_equal={self.variances_equal}, "
            f"recommended_method={self.recommended_method!r})"
        )
