"""Exception types raised by the titration engine and session."""

from __future__ import annotations


class TitrationError(ValueError):
    """Base class for invalid titration input or state."""


class InvalidConfiguration(TitrationError):
    """A concentration or volume supplied to ``configure`` is not positive."""


class InvalidArgument(TitrationError):
    """An operation received an out-of-range argument (e.g. a non-positive dose)."""


class DomainError(TitrationError):
    """A logarithm or ratio would be taken of a non-positive quantity.

    Unreachable for a validated configuration; raised instead of letting a
    NaN reach the curve.
    """
