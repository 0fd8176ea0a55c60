"""Provides exception and warning classes."""

# License: MIT


class InvalidMarginsError(ValueError):
    """Raised when row and column totals cannot define a table."""


class OutOfOrderQueryError(RuntimeError):
    """Raised when a probability is requested for a value not yet enumerated."""


class SamplingFallbackWarning(UserWarning):
    """Warning used when cumulative-mass inversion falls off the support.

    This only happens when the enumerated probabilities sum to slightly
    less than the uniform draw because of floating-point truncation. The
    last enumerated candidate is then returned.
    """
