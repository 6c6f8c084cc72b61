"""
Error taxonomy for the E-series engine.

Fatal input problems raise subclasses of ValueError so callers that already
catch ValueError keep working. Recoverable problems are reported through the
warnings module and never abort a computation.
"""


class ESeriesError(ValueError):
    """Base class for all fatal engine errors."""


class InvalidArgument(ESeriesError):
    """A numeric input is outside the domain of the operation."""


class InvalidSeries(ESeriesError):
    """The series identifier does not name a known E-series."""


class DegradedDirectionWarning(UserWarning):
    """An unknown rounding direction was replaced with 'nearest'."""
