"""
Input validation utilities for pygroupstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pygroupstats.core.defaults import RECOMMENDED_MIN_RESAMPLES, VALID_ALTERNATIVES
from pygroupstats.core.exceptions import (
    InvalidConfigurationError,
    ResamplingPrecisionWarning,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Rejects inputs that result in object dtype (indicating mixed types or
    non-numeric data) and any non-numeric dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        ValidationError: If array is not 1D
    """
    if array.ndim != 1:
        raise ValidationError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_consistent_length(
    *arrays: NDArray,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        ValidationError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise ValidationError(f"Inconsistent lengths: {details}")


def check_trim(trim: float, name: str = "trim") -> float:
    """
    Verify a trimming / winsorizing proportion lies in [0, 0.5).

    Raises:
        InvalidConfigurationError: If the proportion is out of range
    """
    try:
        value = float(trim)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"{name}: expected a number, got {trim!r}", parameter=name, value=trim,
        ) from e
    if not (0.0 <= value < 0.5):
        raise InvalidConfigurationError(
            f"{name}: must satisfy 0 <= {name} < 0.5, got {value}",
            parameter=name, value=trim,
        )
    return value


def check_conf_level(conf_level: float) -> float:
    """
    Verify a confidence level lies strictly between 0 and 1.

    Raises:
        InvalidConfigurationError: If out of range
    """
    if not (0.0 < conf_level < 1.0):
        raise InvalidConfigurationError(
            f"conf_level: must be in (0, 1), got {conf_level}",
            parameter="conf_level", value=conf_level,
        )
    return float(conf_level)


def check_alternative(alternative: str) -> str:
    """
    Verify the alternative hypothesis name.

    Raises:
        InvalidConfigurationError: If not one of VALID_ALTERNATIVES
    """
    if alternative not in VALID_ALTERNATIVES:
        raise InvalidConfigurationError(
            f"alternative: must be one of {VALID_ALTERNATIVES}, got {alternative!r}",
            parameter="alternative", value=alternative,
        )
    return alternative


def check_resamples(
    count: int,
    name: str,
    warnings_list: list[str] | None = None,
) -> int:
    """
    Verify a permutation / bootstrap count and flag low-precision settings.

    Counts below RECOMMENDED_MIN_RESAMPLES are allowed (an explicit opt-in
    for quick runs) but emit ResamplingPrecisionWarning and, when a
    warnings_list is supplied, record the message for the Result envelope.

    Args:
        count: Requested number of resamples
        name: Parameter name for error messages
        warnings_list: Optional accumulator for Result.warnings

    Returns:
        The count as int

    Raises:
        InvalidConfigurationError: If count < 1 or not an integer
    """
    try:
        as_int = int(count)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidConfigurationError(
            f"{name}: expected an integer, got {count!r}", parameter=name, value=count,
        ) from e
    if isinstance(count, bool) or as_int != count:
        raise InvalidConfigurationError(
            f"{name}: expected an integer, got {count!r}", parameter=name, value=count,
        )
    count = as_int
    if count < 1:
        raise InvalidConfigurationError(
            f"{name}: must be >= 1, got {count}", parameter=name, value=count,
        )
    if count < RECOMMENDED_MIN_RESAMPLES:
        msg = (
            f"{name}={count} is below the recommended minimum of "
            f"{RECOMMENDED_MIN_RESAMPLES}; Monte Carlo precision is degraded"
        )
        warnings.warn(msg, ResamplingPrecisionWarning, stacklevel=3)
        if warnings_list is not None:
            warnings_list.append(msg)
    return count
