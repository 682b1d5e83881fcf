"""
Residuals of the one-way group-mean model.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pygroupstats.core.compute.oneway import fit_oneway
from pygroupstats.core.sample import GroupedSample, as_sample


@dataclass(frozen=True)
class ResidualSample:
    """
    y_ij - mean_j for every observation.

    Attributes:
        residuals: Residuals in the order of the input sample, shape (N,)
        group: Group label of each residual, shape (N,)
        group_means: {level: fitted mean}
    """
    residuals: NDArray[np.floating[Any]]
    group: NDArray[np.str_]
    group_means: dict[str, float]

    def __post_init__(self):
        self.residuals.setflags(write=False)
        self.group.setflags(write=False)

    @property
    def n(self) -> int:
        return len(self.residuals)

    def __len__(self) -> int:
        return len(self.residuals)

    def __repr__(self) -> str:
        return f"ResidualSample(n={self.n}, levels={list(self.group_means)})"


def residuals(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
) -> ResidualSample:
    """
    Fit the group-mean model and return its residuals.

    Args:
        y: Responses, or a GroupedSample
        group: Group labels (omit when y is a GroupedSample)
        levels: Optional subset / order of groups

    Returns:
        ResidualSample
    """
    sample = as_sample(y, group, levels=levels)
    fit = fit_oneway(sample.y, sample.codes, sample.levels)
    return ResidualSample(
        residuals=np.array(sample.y - fit.fitted),
        group=np.array(sample.group, dtype=str),
        group_means=dict(zip(sample.levels, (float(m) for m in fit.means))),
    )
