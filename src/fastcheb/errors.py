"""Exceptions raised by fastcheb.

All of them derive from :class:`ValueError`, so callers that already guard
against bad input with ``except ValueError`` keep working.
"""


class DimensionMismatchError(ValueError):
    """Ranks of order / bounds / samples / query point disagree."""


class ShapeMismatchError(ValueError):
    """Vector-valued samples do not share one common length."""


class OutOfDomainError(ValueError):
    """Query point lies outside the interpolation hypercube."""
