"""
Exception and warning hierarchy for pygroupstats.

All exceptions inherit from PyGroupStatsError to allow catching any
library-specific error. Every failure is recoverable: a failed analysis call
leaves no state behind, so the next call proceeds normally.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - Never coerce a failure into a default value (no silent NaN)
"""


class PyGroupStatsError(Exception):
    """Base exception for all pygroupstats errors."""
    pass


class ValidationError(PyGroupStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InsufficientDataError(ValidationError):
    """
    A group lacks enough observations for the requested statistic.

    Attributes:
        group: Label of the offending group, if the failure is per-group
        n: Number of observations available
        required: Number of observations the statistic needs
    """

    def __init__(
        self,
        message: str,
        group: str | None = None,
        n: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.group = group
        self.n = n
        self.required = required


class InvalidGroupCountError(ValidationError):
    """
    A procedure was invoked on the wrong number of groups.

    Typically a two-group procedure (Cohen's d, Welch t-test, Yuen)
    receiving a sample with one or more than two distinct groups.

    Attributes:
        n_groups: Number of distinct groups found
        expected: Description of the acceptable count (e.g. '2', '>= 2')
    """

    def __init__(
        self,
        message: str,
        n_groups: int | None = None,
        expected: str | None = None,
    ):
        super().__init__(message)
        self.n_groups = n_groups
        self.expected = expected


class InvalidConfigurationError(ValidationError):
    """
    A tuning parameter is outside its valid range.

    Examples: trim proportion >= 0.5, resample count < 1, unknown method.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class NumericalError(PyGroupStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateGroupsError(NumericalError):
    """
    One or more groups have zero dispersion and break a weighting formula.

    Raised, for example, when a Welch-type statistic would need the weight
    n_j / s_j^2 of a constant group.

    Attributes:
        groups: Labels of the degenerate groups
    """

    def __init__(self, message: str, groups: tuple[str, ...] = ()):
        super().__init__(message)
        self.groups = tuple(groups)


class ResamplingPrecisionWarning(UserWarning):
    """
    A Monte Carlo procedure ran with fewer resamples than recommended.

    The result is still returned, but its p-value / interval carries more
    Monte Carlo noise than the default configuration would.
    """
    pass
