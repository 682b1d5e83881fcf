"""
GroupedSample: the one-factor sample every procedure consumes.

A GroupedSample is a tidy two-column table (group label, numeric response)
validated once at construction and read-only afterwards. It does not know
which procedure will consume it.

Usage:
    from pygroupstats.core import GroupedSample

    sample = GroupedSample.from_arrays(y, group)
    sample = GroupedSample.from_arrays(y, group, levels=('ctrl', 'treat'))
    sample = GroupedSample.from_records([('a', 1.0), ('b', 2.5), ...])
    sample = GroupedSample.from_dataframe(df, value='score', group='region')

    sample.levels          # ('a', 'b', 'c')
    sample.groups()        # {'a': array([...]), 'b': ..., 'c': ...}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pygroupstats.core.exceptions import (
    InsufficientDataError,
    InvalidGroupCountError,
    ValidationError,
)
from pygroupstats.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
)

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class GroupedSample:
    """
    Validated (group, value) records.

    Construct via factory classmethods, not directly.

    Attributes:
        y: float64 responses, shape (n,)
        group: str labels, shape (n,)
        levels: ordered distinct labels; defines group order everywhere
        codes: int index into levels for every record, shape (n,)
        n: number of records
    """
    y: NDArray[np.floating[Any]]
    group: NDArray[np.str_]
    levels: tuple[str, ...]
    codes: NDArray[np.intp]
    n: int

    def __post_init__(self):
        self.y.setflags(write=False)
        self.group.setflags(write=False)
        self.codes.setflags(write=False)

    @classmethod
    def from_arrays(
        cls,
        y: ArrayLike,
        group: ArrayLike,
        *,
        levels: Sequence[Any] | None = None,
    ) -> GroupedSample:
        """
        Build a sample from parallel response / label arrays.

        Args:
            y: Numeric responses (1D, finite)
            group: Group labels (1D, same length as y); converted to str
            levels: Optional labels to keep, in the order to use. Records
                with other labels are dropped. Default: all distinct labels,
                sorted.

        Returns:
            GroupedSample

        Raises:
            ValidationError: Missing / non-finite values, shape mismatch
            InsufficientDataError: A requested level has no observations
        """
        y_arr = check_array(y, "y")
        check_1d(y_arr, "y")
        check_finite(y_arr, "y")

        group_arr = np.asarray(group)
        if group_arr.ndim != 1:
            raise ValidationError(f"group: expected 1D, got {group_arr.ndim}D")
        check_consistent_length(y_arr, group_arr, names=("y", "group"))
        if group_arr.dtype == object and any(
            v is None or (isinstance(v, float) and np.isnan(v)) for v in group_arr
        ):
            raise ValidationError("group: contains missing labels (None/NaN)")
        if np.issubdtype(group_arr.dtype, np.floating) and np.any(np.isnan(group_arr)):
            raise ValidationError("group: contains missing labels (NaN)")

        group_str = np.array([str(v) for v in group_arr], dtype=str)

        if levels is None:
            level_tuple = tuple(sorted(set(group_str.tolist())))
        else:
            level_tuple = tuple(str(v) for v in levels)
            if len(set(level_tuple)) != len(level_tuple):
                raise ValidationError(f"levels: duplicate labels in {level_tuple}")
            keep = np.isin(group_str, level_tuple)
            y_arr = y_arr[keep]
            group_str = group_str[keep]
            for level in level_tuple:
                if not np.any(group_str == level):
                    raise InsufficientDataError(
                        f"group: level {level!r} has 0 observations",
                        group=level, n=0, required=1,
                    )

        if len(level_tuple) == 0:
            raise InsufficientDataError("sample: no observations", n=0, required=1)

        index = {level: i for i, level in enumerate(level_tuple)}
        codes = np.array([index[g] for g in group_str], dtype=np.intp)

        return cls(
            y=y_arr.astype(np.float64, copy=True),
            group=group_str,
            levels=level_tuple,
            codes=codes,
            n=len(y_arr),
        )

    @classmethod
    def from_records(
        cls,
        records: Iterable[Any],
        *,
        levels: Sequence[Any] | None = None,
    ) -> GroupedSample:
        """
        Build a sample from (group, value) pairs or {'group', 'value'} mappings.
        """
        groups: list[Any] = []
        values: list[Any] = []
        for i, rec in enumerate(records):
            if isinstance(rec, Mapping):
                if 'group' not in rec or 'value' not in rec:
                    raise ValidationError(
                        f"records[{i}]: mapping needs 'group' and 'value' keys"
                    )
                g, v = rec['group'], rec['value']
            else:
                try:
                    g, v = rec
                except (TypeError, ValueError) as e:
                    raise ValidationError(
                        f"records[{i}]: expected a (group, value) pair, got {rec!r}"
                    ) from e
            if g is None or v is None:
                raise ValidationError(f"records[{i}]: missing group or value")
            groups.append(g)
            values.append(v)
        return cls.from_arrays(values, np.array(groups, dtype=object), levels=levels)

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        value: str,
        group: str,
        levels: Sequence[Any] | None = None,
    ) -> GroupedSample:
        """Construct from two columns of a pandas DataFrame."""
        for col in (value, group):
            if col not in df.columns:
                raise ValidationError(
                    f"DataFrame has no column {col!r}. Available: {list(df.columns)}"
                )
        y = df[value].to_numpy(dtype=np.float64)
        g = df[group].to_numpy(dtype=object)
        if levels is None and hasattr(df[group], 'cat'):
            # Unused categories are dropped, used ones keep categorical order
            used = set(df[group].dropna().unique())
            levels = [c for c in df[group].cat.categories if c in used]
        return cls.from_arrays(y, g, levels=levels)

    # === Accessors ===

    @property
    def n_groups(self) -> int:
        return len(self.levels)

    def groups(self) -> dict[str, NDArray[np.floating[Any]]]:
        """Ordered {level: responses} mapping (copies)."""
        return {level: self.y[self.codes == i].copy() for i, level in enumerate(self.levels)}

    def sizes(self) -> dict[str, int]:
        """Ordered {level: n_j} mapping."""
        counts = np.bincount(self.codes, minlength=self.n_groups)
        return {level: int(c) for level, c in zip(self.levels, counts)}

    def subset(self, levels: Sequence[Any]) -> GroupedSample:
        """New sample restricted to (and ordered by) the given levels."""
        return GroupedSample.from_arrays(self.y, self.group, levels=levels)

    def require_min_size(self, required: int, purpose: str) -> None:
        """
        Raise InsufficientDataError if any group has fewer than `required`
        observations.
        """
        for level, n_j in self.sizes().items():
            if n_j < required:
                raise InsufficientDataError(
                    f"{purpose}: group {level!r} has {n_j} observation(s), "
                    f"needs at least {required}",
                    group=level, n=n_j, required=required,
                )

    def require_n_groups(self, expected: int | None = None, *, minimum: int | None = None) -> None:
        """Raise InvalidGroupCountError unless the group count matches."""
        k = self.n_groups
        if expected is not None and k != expected:
            raise InvalidGroupCountError(
                f"expected exactly {expected} groups, got {k}: {list(self.levels)}",
                n_groups=k, expected=str(expected),
            )
        if minimum is not None and k < minimum:
            raise InvalidGroupCountError(
                f"expected at least {minimum} groups, got {k}: {list(self.levels)}",
                n_groups=k, expected=f">= {minimum}",
            )

    def two_groups(
        self, purpose: str, min_size: int = 2,
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
        """
        Responses of the two groups, in level order.

        Raises:
            InvalidGroupCountError: Unless there are exactly two groups
            InsufficientDataError: If a group has fewer than min_size values
        """
        if self.n_groups != 2:
            raise InvalidGroupCountError(
                f"{purpose}: needs exactly 2 groups, got {self.n_groups}: "
                f"{list(self.levels)}; pass levels=(a, b) to select two",
                n_groups=self.n_groups, expected="2",
            )
        self.require_min_size(min_size, purpose)
        g = self.groups()
        return g[self.levels[0]], g[self.levels[1]]

    def __repr__(self) -> str:
        return f"GroupedSample(n={self.n}, levels={list(self.levels)})"


def as_sample(
    y: ArrayLike | GroupedSample,
    group: ArrayLike | None = None,
    *,
    levels: Sequence[Any] | None = None,
) -> GroupedSample:
    """
    Accept either a ready GroupedSample or (y, group) arrays.

    When a GroupedSample is passed with levels, it is subset to them.
    """
    if isinstance(y, GroupedSample):
        if group is not None:
            raise ValidationError(
                "group: must be None when a GroupedSample is passed"
            )
        return y if levels is None else y.subset(levels)
    if group is None:
        raise ValidationError("group: required when y is not a GroupedSample")
    return GroupedSample.from_arrays(y, group, levels=levels)
