"""Exception hierarchy for Drude fitting.

All errors derive from ``ValueError`` as well, so callers that already guard
numeric routines with ``except ValueError`` keep working.
"""

from __future__ import annotations


class DrudeFitError(Exception):
    """Base class for every error raised by :mod:`drudefit`."""


class InvalidInputError(DrudeFitError, ValueError):
    """Empty or malformed sample data, or an invalid configuration value."""


class DomainError(DrudeFitError, ValueError):
    """A quantity that must be strictly positive (ω, ωp, γ, ε∞, ...) is not."""


class EmptySearchSpaceError(DrudeFitError, ValueError):
    """The parameter grid enumerates zero candidates."""


__all__ = [
    "DrudeFitError",
    "InvalidInputError",
    "DomainError",
    "EmptySearchSpaceError",
]
