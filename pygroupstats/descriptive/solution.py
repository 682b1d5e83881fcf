"""
Descriptive statistics solution type.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TYPE_CHECKING

from pygroupstats.core.result import Result
from pygroupstats.descriptive._common import DescribeParams, GroupSummary

if TYPE_CHECKING:
    import pandas as pd


@dataclass
class DescribeSolution:
    """
    User-facing per-group summary.

    Indexable by group label; iterates GroupSummary rows in level order.
    """
    _result: Result[DescribeParams]

    @property
    def groups(self) -> tuple[GroupSummary, ...]:
        return self._result.params.groups

    @property
    def levels(self) -> tuple[str, ...]:
        return tuple(g.group for g in self._result.params.groups)

    @property
    def trim(self) -> float:
        return self._result.params.trim

    @property
    def skew_type(self) -> int:
        return self._result.params.skew_type

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

    def __getitem__(self, level: str) -> GroupSummary:
        for g in self._result.params.groups:
            if g.group == level:
                return g
        raise KeyError(level)

    def __iter__(self):
        return iter(self._result.params.groups)

    def __len__(self) -> int:
        return len(self._result.params.groups)

    def to_dataframe(self) -> 'pd.DataFrame':
        """One row per group; needs pandas."""
        import pandas as pd
        return pd.DataFrame([asdict(g) for g in self.groups]).set_index('group')

    def summary(self) -> str:
        """psych::describeBy-style table."""
        cols = ("n", "mean", "sd", "median", "trimmed", "mad", "min", "max",
                "range", "skew", "kurtosis", "se")
        width = max(8, max(len(g.group) for g in self.groups) + 1)
        lines = [
            f"Descriptive statistics by group (trim = {self.trim}, type = {self.skew_type})",
            f"{'group':<{width}}" + "".join(f"{c:>10}" for c in cols),
        ]
        for g in self.groups:
            vals = (g.mean, g.sd, g.median, g.trimmed_mean, g.mad, g.min, g.max,
                    g.range, g.skewness, g.kurtosis, g.se)
            lines.append(
                f"{g.group:<{width}}{g.n:>10d}" + "".join(f"{v:>10.2f}" for v in vals)
            )
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"DescribeSolution(levels={list(self.levels)}, trim={self.trim})"
