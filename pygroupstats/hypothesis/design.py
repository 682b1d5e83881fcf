"""
HypothesisDesign: tagged union for two-group and one-sample test inputs.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. Immutable after construction; all argument
validation happens here so the backends can assume clean inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from math import comb
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pygroupstats.core.compute.robust import trim_count
from pygroupstats.core.defaults import (
    DEFAULT_EXACT_LIMIT,
    DEFAULT_N_PERM_TWO_SAMPLE,
    DEFAULT_ROBUST_TRIM,
    MAX_EXACT_ASSIGNMENTS,
)
from pygroupstats.core.exceptions import InsufficientDataError, InvalidConfigurationError
from pygroupstats.core.sample import GroupedSample, as_sample
from pygroupstats.core.validation import (
    check_1d,
    check_alternative,
    check_array,
    check_conf_level,
    check_finite,
    check_resamples,
    check_trim,
)

VALID_DISTRIBUTIONS = ("auto", "exact", "monte_carlo")

# Lilliefors p-value approximation is only defined from here on
LILLIE_MIN_N = 5


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]] | None = None
    _levels: tuple[str, ...] = ()

    _mu: float = 0.0
    _alternative: str = "two.sided"
    _conf_level: float = 0.95
    _var_equal: bool = False
    _trim: float = 0.0

    # Resampling
    _n_resamples: int | None = None
    _mode: str | None = None
    _side: bool = True
    _seed: int | None = None
    _n_workers: int = 1

    _data_name: str = "x"
    _warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        return self._y

    @property
    def levels(self) -> tuple[str, ...]:
        return self._levels

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def alternative(self) -> str:
        return self._alternative

    @property
    def conf_level(self) -> float:
        return self._conf_level

    @property
    def var_equal(self) -> bool:
        return self._var_equal

    @property
    def trim(self) -> float:
        return self._trim

    @property
    def n_resamples(self) -> int | None:
        return self._n_resamples

    @property
    def mode(self) -> str | None:
        """'exact' or 'monte_carlo' for permutation tests."""
        return self._mode

    @property
    def side(self) -> bool:
        return self._side

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def n_workers(self) -> int:
        return self._n_workers

    @property
    def data_name(self) -> str:
        return self._data_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._warnings

    # === Factories ===

    @classmethod
    def for_t_test(
        cls,
        y: ArrayLike | GroupedSample,
        group: ArrayLike | None = None,
        *,
        levels: Sequence[Any] | None = None,
        alternative: str = "two.sided",
        mu: float = 0.0,
        conf_level: float = 0.95,
        var_equal: bool = False,
    ) -> HypothesisDesign:
        """Two-sample t-test (Welch or pooled)."""
        sample = as_sample(y, group, levels=levels)
        x1, x2 = sample.two_groups("t_test")
        return cls(
            test_type="t_two_sample",
            _x=x1, _y=x2, _levels=sample.levels,
            _mu=float(mu),
            _alternative=check_alternative(alternative),
            _conf_level=check_conf_level(conf_level),
            _var_equal=bool(var_equal),
            _data_name=_two_group_name(sample),
        )

    @classmethod
    def for_permutation_test(
        cls,
        y: ArrayLike | GroupedSample,
        group: ArrayLike | None = None,
        *,
        levels: Sequence[Any] | None = None,
        alternative: str = "two.sided",
        distribution: str = "auto",
        n_perm: int = DEFAULT_N_PERM_TWO_SAMPLE,
        exact_limit: int = DEFAULT_EXACT_LIMIT,
        seed: int | None = None,
        n_workers: int = 1,
    ) -> HypothesisDesign:
        """
        Two-sample permutation test of the difference in means.

        distribution='auto' enumerates every label assignment when there are
        at most exact_limit of them and samples n_perm otherwise. Exact
        enumeration is refused above MAX_EXACT_ASSIGNMENTS assignments.
        """
        if distribution not in VALID_DISTRIBUTIONS:
            raise InvalidConfigurationError(
                f"distribution: must be one of {VALID_DISTRIBUTIONS}, got {distribution!r}",
                parameter="distribution", value=distribution,
            )
        if not (1 <= exact_limit <= MAX_EXACT_ASSIGNMENTS):
            raise InvalidConfigurationError(
                f"exact_limit: must be in [1, {MAX_EXACT_ASSIGNMENTS}], got {exact_limit}",
                parameter="exact_limit", value=exact_limit,
            )
        sample = as_sample(y, group, levels=levels)
        x1, x2 = sample.two_groups("permutation_t_test", min_size=1)
        n_assign = comb(len(x1) + len(x2), len(x1))
        if distribution == "exact" and n_assign > MAX_EXACT_ASSIGNMENTS:
            raise InvalidConfigurationError(
                f"distribution='exact': {n_assign} label assignments exceed the "
                f"enumeration cap of {MAX_EXACT_ASSIGNMENTS}; use 'monte_carlo'",
                parameter="distribution", value=distribution,
            )

        warn_list: list[str] = []
        if distribution == "exact" or (distribution == "auto" and n_assign <= exact_limit):
            mode = "exact"
            n_resamples = n_assign
        else:
            mode = "monte_carlo"
            n_resamples = check_resamples(n_perm, "n_perm", warn_list)

        return cls(
            test_type="permutation_two_sample",
            _x=x1, _y=x2, _levels=sample.levels,
            _alternative=check_alternative(alternative),
            _n_resamples=n_resamples,
            _mode=mode,
            _seed=seed,
            _n_workers=n_workers,
            _data_name=_two_group_name(sample),
            _warnings=tuple(warn_list),
        )

    @classmethod
    def for_yuen_test(
        cls,
        y: ArrayLike | GroupedSample,
        group: ArrayLike | None = None,
        *,
        levels: Sequence[Any] | None = None,
        trim: float = DEFAULT_ROBUST_TRIM,
        alternative: str = "two.sided",
        conf_level: float = 0.95,
        n_boot: int | None = None,
        side: bool = True,
        seed: int | None = None,
        n_workers: int = 1,
    ) -> HypothesisDesign:
        """
        Yuen's trimmed-means test; bootstrap-t when n_boot is given.

        Each group must keep at least two observations after trimming.
        """
        trim = check_trim(trim)
        sample = as_sample(y, group, levels=levels)
        x1, x2 = sample.two_groups("yuen_test")
        for level, x in zip(sample.levels, (x1, x2)):
            h = len(x) - 2 * trim_count(len(x), trim)
            if h < 2:
                raise InsufficientDataError(
                    f"yuen_test: group {level!r} keeps {h} observation(s) after "
                    f"trimming {trim} from each tail, needs at least 2",
                    group=level, n=len(x), required=2 * trim_count(len(x), trim) + 2,
                )
        warn_list: list[str] = []
        if n_boot is not None:
            n_boot = check_resamples(n_boot, "n_boot", warn_list)
        return cls(
            test_type="yuen_bootstrap" if n_boot is not None else "yuen",
            _x=x1, _y=x2, _levels=sample.levels,
            _alternative=check_alternative(alternative),
            _conf_level=check_conf_level(conf_level),
            _trim=trim,
            _n_resamples=n_boot,
            _side=bool(side),
            _seed=seed,
            _n_workers=n_workers,
            _data_name=_two_group_name(sample),
            _warnings=tuple(warn_list),
        )

    @classmethod
    def for_lillie_test(cls, x: ArrayLike, *, data_name: str = "x") -> HypothesisDesign:
        """Lilliefors (KS) normality test of one sample."""
        arr = check_array(x, "x")
        check_1d(arr, "x")
        check_finite(arr, "x")
        if len(arr) < LILLIE_MIN_N:
            raise InsufficientDataError(
                f"lillie_test: needs at least {LILLIE_MIN_N} observations, got {len(arr)}",
                n=len(arr), required=LILLIE_MIN_N,
            )
        return cls(
            test_type="lillie",
            _x=arr.astype(np.float64, copy=True),
            _data_name=data_name,
        )

    def __repr__(self) -> str:
        n = len(self._x) + (len(self._y) if self._y is not None else 0)
        return f"HypothesisDesign(test_type={self.test_type!r}, n={n})"


def _two_group_name(sample: GroupedSample) -> str:
    a, b = sample.levels
    return f"y by group ({a}, {b})"
